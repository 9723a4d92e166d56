"""
Apple II GCR (Group Coded Recording) encoder for 16-sector disks.

This module converts logical sector data into the self-clocking bitstream
that a Disk II controller reads back from a 5.25" floppy.

Track layout (per physical sector, after a 64-sync leader):
    - Address field: D5 AA 96, volume/track/sector/checksum in 4-and-4,
      DE AA EB, then 7 sync words
    - Data field: D5 AA AD, 343 bytes of 6-and-2 encoded contents, DE AA EB
    - Gap: 16 sync words, or a single FF after the last sector

Key Functions:
    encode_6_and_2: Encode a 256-byte sector into 343 disk bytes
    encode_track: Encode 16 sectors into a caller-provided track buffer
    encode_track_data: Encode 16 sectors into a new TrackData
    logical_sector_for: Interleave mapping from physical to logical sector
"""

import logging
from typing import Union

from picturedsk.codec.bitstream import GCRBitstream
from picturedsk.codec.errors import EncodingError
from picturedsk.core.geometry import (
    BITS_TRACK_CAPACITY,
    BITS_TRACK_SIZE,
    BYTES_PER_SECTOR,
    BYTES_PER_TRACK,
    DOS_VOLUME_NUMBER,
    GCR_SECTOR_ENCODED_SIZE,
    SECTORS_PER_TRACK,
    TRACK_LEADER_SYNC_COUNT,
    SectorFormat,
    TrackData,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

ADDRESS_PROLOGUE = (0xD5, 0xAA, 0x96)
DATA_PROLOGUE = (0xD5, 0xAA, 0xAD)
EPILOGUE = (0xDE, 0xAA, 0xEB)

ADDRESS_GAP_SYNC_COUNT = 7    # Between address field and data field
SECTOR_GAP_SYNC_COUNT = 16    # Between sectors
TRACK_END_BYTE = 0xFF         # After the last sector

# Number of low-bit bytes in a 6-and-2 encoded sector
SIX_AND_TWO_AUX_SIZE = 86

# 6-bit value -> valid disk byte (high bit set, no more than one pair of
# consecutive zero bits, at least two adjacent one bits besides bit 7).
SIX_AND_TWO_TABLE = bytes((
    0x96, 0x97, 0x9A, 0x9B, 0x9D, 0x9E, 0x9F, 0xA6,
    0xA7, 0xAB, 0xAC, 0xAD, 0xAE, 0xAF, 0xB2, 0xB3,
    0xB4, 0xB5, 0xB6, 0xB7, 0xB9, 0xBA, 0xBB, 0xBC,
    0xBD, 0xBE, 0xBF, 0xCB, 0xCD, 0xCE, 0xCF, 0xD3,
    0xD6, 0xD7, 0xD9, 0xDA, 0xDB, 0xDC, 0xDD, 0xDE,
    0xDF, 0xE5, 0xE6, 0xE7, 0xE9, 0xEA, 0xEB, 0xEC,
    0xED, 0xEE, 0xEF, 0xF2, 0xF3, 0xF4, 0xF5, 0xF6,
    0xF7, 0xF9, 0xFA, 0xFB, 0xFC, 0xFD, 0xFE, 0xFF,
))

# Two-bit reversal used when packing the low bits
_BIT_REVERSE = (0, 2, 1, 3)

# Interleave multipliers
_INTERLEAVE_MULTIPLIER = {
    SectorFormat.DOS_3_3: 7,
    SectorFormat.PRODOS: 8,
}


# =============================================================================
# Sector Encoding
# =============================================================================

def encode_6_and_2(sector: bytes) -> bytes:
    """
    Encode a 256-byte sector into 343 disk bytes.

    The first 86 values pack the bottom two bits of the sector bytes
    (bit-reversed, three source bytes each, except the last two which
    take only two); the next 256 hold the top six bits. Every value is
    then XORed with the one before it, with a trailing checksum value,
    and finally mapped through the 6-and-2 translation table.

    Args:
        sector: Exactly 256 bytes of sector contents

    Returns:
        343 encoded disk bytes

    Raises:
        EncodingError: If the sector is not 256 bytes
    """
    if len(sector) != BYTES_PER_SECTOR:
        raise EncodingError(
            f"Sector must be {BYTES_PER_SECTOR} bytes, got {len(sector)}"
        )

    values = bytearray(GCR_SECTOR_ENCODED_SIZE)

    for c in range(84):
        values[c] = (
            _BIT_REVERSE[sector[c] & 3]
            | (_BIT_REVERSE[sector[c + 86] & 3] << 2)
            | (_BIT_REVERSE[sector[c + 172] & 3] << 4)
        )
    # 256 = 84 * 3 + 2 * 2, so the last two low-bit values cover two bytes each
    values[84] = _BIT_REVERSE[sector[84] & 3] | (_BIT_REVERSE[sector[170] & 3] << 2)
    values[85] = _BIT_REVERSE[sector[85] & 3] | (_BIT_REVERSE[sector[171] & 3] << 2)

    for c in range(BYTES_PER_SECTOR):
        values[SIX_AND_TWO_AUX_SIZE + c] = sector[c] >> 2

    # Running checksum: each value becomes itself XOR its predecessor,
    # working backwards so predecessors are still unmodified. Index 0 is
    # left as is and the last slot carries the final running value.
    values[342] = values[341]
    for location in range(341, 0, -1):
        values[location] ^= values[location - 1]

    return bytes(SIX_AND_TWO_TABLE[v] for v in values)


def logical_sector_for(physical_sector: int,
                       sector_format: SectorFormat = SectorFormat.DOS_3_3) -> int:
    """
    Get the logical sector stored in a physical sector slot.

    Args:
        physical_sector: Physical sector index (0-15)
        sector_format: DOS 3.3 or ProDOS ordering

    Returns:
        Logical sector index (0-15)
    """
    if not 0 <= physical_sector < SECTORS_PER_TRACK:
        raise EncodingError(f"Invalid physical sector: {physical_sector}")
    if physical_sector == SECTORS_PER_TRACK - 1:
        return physical_sector
    multiplier = _INTERLEAVE_MULTIPLIER[SectorFormat(sector_format)]
    return (physical_sector * multiplier) % (SECTORS_PER_TRACK - 1)


# =============================================================================
# Track Encoding
# =============================================================================

def encode_track(dest: Union[bytearray, memoryview], payload: bytes,
                 track_number: int,
                 sector_format: SectorFormat = SectorFormat.DOS_3_3) -> int:
    """
    Encode a full track of sectors into `dest`.

    The first BITS_TRACK_SIZE bytes of `dest` are cleared first; anything
    not covered by the returned bit count stays zero and acts as padding.

    Args:
        dest: Writable buffer of at least BITS_TRACK_SIZE (6656) bytes
        payload: 4096 bytes, logical sectors 0-15 in order
        track_number: Track number written into the address fields (0-255)
        sector_format: Interleave to apply (DOS 3.3 or ProDOS)

    Returns:
        Number of valid bits written

    Raises:
        EncodingError: If any argument violates the layout
    """
    if len(dest) < BITS_TRACK_SIZE:
        raise EncodingError(
            f"Track buffer must hold at least {BITS_TRACK_SIZE} bytes, "
            f"got {len(dest)}",
            track=track_number,
        )
    if len(payload) != BYTES_PER_TRACK:
        raise EncodingError(
            f"Track payload must be {BYTES_PER_TRACK} bytes, got {len(payload)}",
            track=track_number,
        )
    if not 0 <= track_number <= 0xFF:
        raise EncodingError(f"Invalid track number: {track_number}")
    try:
        sector_format = SectorFormat(sector_format)
    except ValueError:
        raise EncodingError(
            f"Invalid sector format: {sector_format!r}", track=track_number
        ) from None

    window = memoryview(dest)[:BITS_TRACK_SIZE]
    try:
        window[:] = bytes(BITS_TRACK_SIZE)
        stream = GCRBitstream(window)

        stream.write_sync(TRACK_LEADER_SYNC_COUNT)

        for physical in range(SECTORS_PER_TRACK):
            # Address field
            stream.write_bytes(ADDRESS_PROLOGUE)
            stream.write_4_and_4(DOS_VOLUME_NUMBER)
            stream.write_4_and_4(track_number)
            stream.write_4_and_4(physical)
            stream.write_4_and_4(DOS_VOLUME_NUMBER ^ track_number ^ physical)
            stream.write_bytes(EPILOGUE)
            stream.write_sync(ADDRESS_GAP_SYNC_COUNT)

            # Data field
            logical = logical_sector_for(physical, sector_format)
            offset = logical * BYTES_PER_SECTOR
            stream.write_bytes(DATA_PROLOGUE)
            stream.write_bytes(encode_6_and_2(payload[offset:offset + BYTES_PER_SECTOR]))
            stream.write_bytes(EPILOGUE)

            if physical < SECTORS_PER_TRACK - 1:
                stream.write_sync(SECTOR_GAP_SYNC_COUNT)
            else:
                stream.write_byte(TRACK_END_BYTE)
    finally:
        window.release()

    # Writes are bounds-checked against the window, so this always holds
    assert stream.position <= BITS_TRACK_CAPACITY

    logger.debug(
        "Encoded track %d (%s): %d bits",
        track_number, sector_format.name, stream.position
    )
    return stream.position


def encode_track_data(payload: bytes, track_number: int,
                      sector_format: SectorFormat = SectorFormat.DOS_3_3) -> TrackData:
    """
    Encode a track into a freshly allocated buffer.

    Returns:
        TrackData holding the full 13-block buffer and the valid bit count
    """
    buffer = bytearray(BITS_TRACK_SIZE)
    bit_count = encode_track(buffer, payload, track_number, sector_format)
    return TrackData(bytes(buffer), bit_count)
