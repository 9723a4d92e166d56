"""
Payload, picture and bitstream fixtures for testing PictureDSK.

Provides sector payloads with recognisable contents, small pictures as
numpy pixel buffers, and readers that pull bytes and sectors back out of
an encoded track so tests can check where things landed.
"""

import struct
from typing import Dict, Tuple

import numpy as np

from picturedsk.codec.gcr_codec import SIX_AND_TWO_TABLE

# Track layout, in bits
LEADER_BITS = 64 * 10
ADDRESS_FIELD_BITS = 3 * 8 + 4 * 16 + 3 * 8 + 7 * 10   # 182
DATA_FIELD_BITS = 3 * 8 + 343 * 8 + 3 * 8              # 2792
SECTOR_GAP_BITS = 16 * 10
SECTOR_BITS = ADDRESS_FIELD_BITS + DATA_FIELD_BITS     # 2974
FULL_TRACK_BITS = LEADER_BITS + 16 * SECTOR_BITS + 15 * SECTOR_GAP_BITS + 8

_REVERSE_TABLE = {value: index for index, value in enumerate(SIX_AND_TWO_TABLE)}
_BIT_REVERSE = (0, 2, 1, 3)


# =============================================================================
# Payloads
# =============================================================================

def sector_filled_payload() -> bytes:
    """4096-byte track payload where every byte of sector n equals n."""
    return b''.join(bytes([sector]) * 256 for sector in range(16))


def counting_sector(seed: int = 0) -> bytes:
    """256-byte sector whose bytes count upwards from `seed`."""
    return bytes((seed + i) & 0xFF for i in range(256))


def counting_payload() -> bytes:
    """4096-byte track payload of distinct counting sectors."""
    return b''.join(counting_sector(sector * 17) for sector in range(16))


# =============================================================================
# Pictures
# =============================================================================

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def solid_picture(colour=WHITE, width: int = 8, height: int = 8) -> np.ndarray:
    """Picture of a single colour."""
    return np.tile(np.array(colour, dtype=np.uint8), (height, width, 1))


def split_picture(vertical: bool = True) -> np.ndarray:
    """
    Two-pixel picture split into white and black halves.

    vertical=True gives a white left half; vertical=False a white top half.
    """
    shape = (1, 2, 4) if vertical else (2, 1, 4)
    pixels = np.zeros(shape, dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[0, 0, :3] = 255
    return pixels


# =============================================================================
# Bitstream Readers
# =============================================================================

def read_byte_at(buffer: bytes, bit_index: int) -> int:
    """Read 8 bits starting at any bit offset (most significant first)."""
    position, shift = divmod(bit_index, 8)
    word = buffer[position] << 8
    if position + 1 < len(buffer):
        word |= buffer[position + 1]
    return (word >> (8 - shift)) & 0xFF


def read_bytes_at(buffer: bytes, bit_index: int, count: int) -> bytes:
    return bytes(read_byte_at(buffer, bit_index + 8 * i) for i in range(count))


def decode_4_and_4(pair: bytes) -> int:
    return ((pair[0] << 1) | 1) & pair[1]


def decode_6_and_2(encoded: bytes) -> Tuple[bytes, bool]:
    """
    Decode 343 disk bytes back into a 256-byte sector.

    Returns:
        (sector, checksum_ok)
    """
    values = [_REVERSE_TABLE[b] for b in encoded]

    running = 0
    decoded = []
    for value in values[:342]:
        running ^= value
        decoded.append(running)
    checksum_ok = decoded[341] == values[342]

    sector = bytearray(256)
    for c in range(256):
        low = (decoded[c % 86] >> (2 * (c // 86))) & 3
        sector[c] = (decoded[86 + c] << 2) | _BIT_REVERSE[low]
    return bytes(sector), checksum_ok


def sector_start_bit(physical_sector: int) -> int:
    """Bit offset of a sector's address prologue in an encoded track."""
    return LEADER_BITS + physical_sector * (SECTOR_BITS + SECTOR_GAP_BITS)


def read_address_field(track: bytes, physical_sector: int) -> Tuple[int, int, int, int]:
    """(volume, track, sector, checksum) from a sector's address field."""
    start = sector_start_bit(physical_sector) + 24
    fields = read_bytes_at(track, start, 8)
    return tuple(decode_4_and_4(fields[i:i + 2]) for i in range(0, 8, 2))


def read_data_field(track: bytes, physical_sector: int) -> Tuple[bytes, bool]:
    """Decoded contents of a sector's data field."""
    start = sector_start_bit(physical_sector) + ADDRESS_FIELD_BITS + 24
    return decode_6_and_2(read_bytes_at(track, start, 343))


# =============================================================================
# WOZ Parsing
# =============================================================================

def parse_chunks(image: bytes) -> Dict[str, Tuple[int, bytes]]:
    """Map chunk tag -> (payload offset, payload) for a WOZ file."""
    chunks = {}
    offset = 12
    while offset < len(image):
        name = image[offset:offset + 4].decode('ascii')
        (size,) = struct.unpack_from('<I', image, offset + 4)
        chunks[name] = (offset + 8, image[offset + 8:offset + 8 + size])
        offset += 8 + size
    return chunks


def chunk_order(image: bytes):
    return list(parse_chunks(image))


def trk_entries(trks_payload: bytes, count: int):
    """(starting block, block count, bit count) for the first `count` tracks."""
    return [struct.unpack_from('<HHI', trks_payload, 8 * i) for i in range(count)]
