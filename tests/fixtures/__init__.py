"""
Test fixtures for PictureDSK.

Provides payloads, pictures, bitstream readers and a minimal WOZ chunk
parser for testing without real disks or image files.
"""

from tests.fixtures.payloads import (
    FULL_TRACK_BITS,
    LEADER_BITS,
    ADDRESS_FIELD_BITS,
    SECTOR_BITS,
    SECTOR_GAP_BITS,
    WHITE,
    BLACK,
    sector_filled_payload,
    counting_sector,
    counting_payload,
    solid_picture,
    split_picture,
    read_byte_at,
    read_bytes_at,
    decode_4_and_4,
    decode_6_and_2,
    sector_start_bit,
    read_address_field,
    read_data_field,
    parse_chunks,
    chunk_order,
    trk_entries,
)

__all__ = [
    "FULL_TRACK_BITS",
    "LEADER_BITS",
    "ADDRESS_FIELD_BITS",
    "SECTOR_BITS",
    "SECTOR_GAP_BITS",
    "WHITE",
    "BLACK",
    "sector_filled_payload",
    "counting_sector",
    "counting_payload",
    "solid_picture",
    "split_picture",
    "read_byte_at",
    "read_bytes_at",
    "decode_4_and_4",
    "decode_6_and_2",
    "sector_start_bit",
    "read_address_field",
    "read_data_field",
    "parse_chunks",
    "chunk_order",
    "trk_entries",
]
