"""
GCR codec for Apple II 16-sector disks.

This module encodes logical sector data into the bit-level GCR format
recorded on a 5.25" floppy: 4-and-4 address fields, 6-and-2 data fields
and 10-bit sync words, packed into a non-byte-aligned bitstream.

Classes:
    GCRBitstream: Destination buffer with a bit cursor

Exceptions:
    EncodingError: Input or destination does not match the fixed layout
"""

from .errors import EncodingError
from .bitstream import (
    GCRBitstream,
    write_byte,
    write_4_and_4,
    write_sync,
    SYNC_BYTE,
    SYNC_WORD_BITS,
)
from .gcr_codec import (
    SIX_AND_TWO_TABLE,
    encode_6_and_2,
    encode_track,
    encode_track_data,
    logical_sector_for,
)

__all__ = [
    "EncodingError",
    "GCRBitstream",
    "write_byte",
    "write_4_and_4",
    "write_sync",
    "SYNC_BYTE",
    "SYNC_WORD_BITS",
    "SIX_AND_TWO_TABLE",
    "encode_6_and_2",
    "encode_track",
    "encode_track_data",
    "logical_sector_for",
]
