"""
Disk geometry and track data for Apple II 5.25" 16-sector disks.

This module holds the fixed layout constants shared by the GCR codec and
the WOZ image writer, plus the TrackData container that carries one
encoded track from the encoder to the image assembler.

Layout (DOS 3.3 / ProDOS, 16 sectors):
    - 16 sectors per track
    - 256 bytes per sector
    - 13 WOZ blocks (6656 bytes) of bitstream space per track
"""

from dataclasses import dataclass, field
from enum import IntEnum


# Logical sector layout
SECTORS_PER_TRACK = 16
BYTES_PER_SECTOR = 256
BYTES_PER_TRACK = SECTORS_PER_TRACK * BYTES_PER_SECTOR  # 4096

# Encoded track layout
BITS_BLOCK_SIZE = 512
BITS_BLOCKS_PER_TRACK = 13
BITS_TRACK_SIZE = BITS_BLOCKS_PER_TRACK * BITS_BLOCK_SIZE  # 6656 bytes
BITS_TRACK_CAPACITY = BITS_TRACK_SIZE * 8                  # 53248 bits

# Encoded sector contents (6-and-2)
GCR_SECTOR_ENCODED_SIZE = 343

# Address field constants
DOS_VOLUME_NUMBER = 254
TRACK_LEADER_SYNC_COUNT = 64


# =============================================================================
# Enumerations
# =============================================================================

class SectorFormat(IntEnum):
    """Logical-to-physical sector ordering used when laying out a track."""
    DOS_3_3 = 0   # Primary interleave (multiplier 7)
    PRODOS = 1    # Alternate interleave (multiplier 8)


# =============================================================================
# Track Data
# =============================================================================

def block_count_for(length: int) -> int:
    """Number of 512-byte blocks needed to hold `length` bytes."""
    return (length + BITS_BLOCK_SIZE - 1) // BITS_BLOCK_SIZE


@dataclass
class TrackData:
    """
    One track's worth of bitstream data.

    Attributes:
        data: Bitstream bytes. Bytes past the valid bit count are padding
            and are expected to be zero.
        bit_count: Number of valid bits in `data`. Defaults to the whole
            buffer (len(data) * 8).

    Calculated Properties:
        block_count: 512-byte blocks the track occupies in the image
        valid_length: Bytes covering the valid bits

    Example:
        >>> track = TrackData(bytes(6656))
        >>> track.block_count, track.bit_count
        (13, 53248)
    """
    data: bytes
    bit_count: int = field(default=-1)

    def __post_init__(self):
        self.data = bytes(self.data)
        if self.bit_count < 0:
            self.bit_count = len(self.data) * 8
        if self.bit_count > len(self.data) * 8:
            raise ValueError(
                f"Bit count {self.bit_count} exceeds buffer capacity "
                f"{len(self.data) * 8}"
            )

    @property
    def block_count(self) -> int:
        return block_count_for(len(self.data))

    @property
    def valid_length(self) -> int:
        return (self.bit_count + 7) // 8

    @property
    def valid_bytes(self) -> bytes:
        """The bytes holding valid bits, without trailing padding."""
        return self.data[:self.valid_length]

    def padded(self) -> bytes:
        """Track bytes zero-padded to a whole number of blocks."""
        return self.data.ljust(self.block_count * BITS_BLOCK_SIZE, b'\x00')
