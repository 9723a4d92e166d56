"""
Bit-level writer for GCR track bitstreams.

Disk bytes on an Apple II track are not byte aligned: sync words are ten
bits long, so every field after the first sync lands at an arbitrary bit
offset. The writer here ORs 8-bit values into a byte buffer at any bit
position.

The writer only ever sets bits. It assumes the destination is pre-zeroed
and that no two writes overlap; with assertions enabled this is checked
on every write.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from picturedsk.codec.errors import EncodingError

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

SYNC_BYTE = 0xFF
SYNC_SLACK_BITS = 2       # Zero bits after each sync byte
SYNC_WORD_BITS = 8 + SYNC_SLACK_BITS
FOUR_AND_FOUR_MASK = 0xAA


# =============================================================================
# Bit Writing Primitives
# =============================================================================

def write_byte(buffer: bytearray, bit_index: int, value: int) -> int:
    """
    OR one byte into `buffer` starting at bit `bit_index`.

    Bits are written most significant first. When `bit_index` is not byte
    aligned the value is split across two adjacent bytes.

    Args:
        buffer: Pre-zeroed destination buffer
        bit_index: Bit offset of the first (most significant) bit
        value: Byte value (0-255)

    Returns:
        Bit index just past the written byte (bit_index + 8)

    Raises:
        EncodingError: If the value is out of range or the write would run
            past the end of the buffer
    """
    if not 0 <= value <= 0xFF:
        raise EncodingError(f"Value {value} is not a byte", bit_index=bit_index)
    if bit_index < 0 or (bit_index + 7) >> 3 >= len(buffer):
        raise EncodingError(
            f"Write past end of {len(buffer)}-byte buffer",
            bit_index=bit_index,
        )

    shift = bit_index & 7
    byte_position = bit_index >> 3

    assert buffer[byte_position] & (0xFF >> shift) == 0, \
        f"bits already set at bit {bit_index}"
    buffer[byte_position] |= value >> shift
    if shift:
        assert buffer[byte_position + 1] & ((0xFF << (8 - shift)) & 0xFF) == 0, \
            f"bits already set at bit {bit_index}"
        buffer[byte_position + 1] |= (value << (8 - shift)) & 0xFF

    return bit_index + 8


def write_4_and_4(buffer: bytearray, bit_index: int, value: int) -> int:
    """
    Write a byte in 4-and-4 encoding (two self-clocking disk bytes).

    The odd bits go out first as (value >> 1) | 0xAA, then the even bits
    as value | 0xAA.

    Returns:
        Bit index just past the two bytes (bit_index + 16)
    """
    bit_index = write_byte(buffer, bit_index, (value >> 1) | FOUR_AND_FOUR_MASK)
    bit_index = write_byte(buffer, bit_index, (value & 0xFF) | FOUR_AND_FOUR_MASK)
    return bit_index


def write_sync(buffer: bytearray, bit_index: int) -> int:
    """
    Write a 10-bit sync word: 0xFF followed by two zero bits.

    The two slack bits are skipped, not written.

    Returns:
        Bit index just past the sync word (bit_index + 10)
    """
    bit_index = write_byte(buffer, bit_index, SYNC_BYTE)
    return bit_index + SYNC_SLACK_BITS


# =============================================================================
# Bitstream Writer
# =============================================================================

@dataclass
class GCRBitstream:
    """
    A destination buffer and a bit cursor.

    Wraps the write primitives so the track encoder can emit fields
    sequentially without threading the bit index through every call.

    Example:
        >>> stream = GCRBitstream(bytearray(4))
        >>> stream.write_sync()
        >>> stream.write_byte(0xD5)
        >>> stream.position
        18
    """

    buffer: bytearray
    position: int = 0

    def write_byte(self, value: int) -> None:
        self.position = write_byte(self.buffer, self.position, value)

    def write_bytes(self, values: Iterable[int]) -> None:
        for value in values:
            self.position = write_byte(self.buffer, self.position, value)

    def write_4_and_4(self, value: int) -> None:
        self.position = write_4_and_4(self.buffer, self.position, value)

    def write_sync(self, count: int = 1) -> None:
        for _ in range(count):
            self.position = write_sync(self.buffer, self.position)

    @property
    def capacity(self) -> int:
        """Buffer size in bits."""
        return len(self.buffer) * 8

    def __len__(self) -> int:
        """Number of bits written so far."""
        return self.position
