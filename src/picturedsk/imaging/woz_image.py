"""
WOZ 2.0 disk image assembly.

This module builds a WOZ image from a set of encoded tracks. The image is
made of four chunks, always written in this order:

    INFO: Disk-level metadata (60 bytes)
    TMAP: Quarter-track position -> track index (160 entries)
    TRKS: Track directory (160 x 8 bytes) followed by the track bitstreams
    WRIT: Per-track instructions for writing the image back to a real disk

TRKS records each track's starting block relative to the start of the
file, so the sizes of the header, INFO and TMAP chunks must be final
before TRKS is built.

Track placement:
    Track 0 sits at its normal position 0.00 with bleed into 0.25 and an
    empty 0.50. Every further track occupies three adjacent quarter-track
    positions starting at 1.00 with no gap between them.

Example:
    >>> tracks = [encode_track_data(payload, 0)]
    >>> write_woz(tracks, "disk.woz")
"""

import logging
import struct
from pathlib import Path
from typing import List, Optional, Sequence, Union

from picturedsk.core.geometry import BITS_BLOCK_SIZE, TrackData
from picturedsk.core.settings import CREATOR_FIELD_SIZE, DiskInfo
from picturedsk.imaging.chunk import WozChunk
from picturedsk.imaging.crc import crc32
from picturedsk.imaging.image_formats import (
    CHUNK_HEADER_SIZE,
    CHUNK_INFO,
    CHUNK_TMAP,
    CHUNK_TRKS,
    CHUNK_WRIT,
    INFO_CHUNK_SIZE,
    TMAP_EMPTY,
    TMAP_ENTRY_COUNT,
    TRKS_BITS_OFFSET,
    WOZ_CRC_OFFSET,
    WOZ_HEADER_PREFIX,
    WOZ_HEADER_SIZE,
    WRIT_COMMANDS_PER_TRACK,
    WRIT_FLAG_CLEAR_FIRST,
    ImageFormatError,
    ImageGeometryError,
    ImageWriteError,
)
from picturedsk.utils.context_managers import AtomicOutputContext

logger = logging.getLogger(__name__)


# Quarter-track positions per track after track 0
QUARTER_TRACKS_PER_TRACK = 3

# Track 0 is written at 0.00, track 1 at 1.00, then every 3 quarter-tracks
WRIT_FIRST_STEP = 4

# Highest track count whose every track has a TMAP slot and a WRIT position
MAX_TRACK_COUNT = (TMAP_ENTRY_COUNT - 1) // QUARTER_TRACKS_PER_TRACK


# =============================================================================
# Layout Helpers
# =============================================================================

def tmap_entries(track_count: int) -> List[int]:
    """
    Build the 160 TMAP entries for `track_count` tracks.

    Returns:
        List of track indexes, TMAP_EMPTY where no track is present
    """
    entries = [0, 0, TMAP_EMPTY]
    for position in range(3, TMAP_ENTRY_COUNT):
        nominal_track = position // QUARTER_TRACKS_PER_TRACK
        entries.append(nominal_track if nominal_track < track_count else TMAP_EMPTY)
    return entries


def write_subtrack_for(track_index: int) -> int:
    """Quarter-track position the WRIT chunk writes a track at."""
    if track_index == 0:
        return 0
    return WRIT_FIRST_STEP + (track_index - 1) * QUARTER_TRACKS_PER_TRACK


# =============================================================================
# WOZ Image
# =============================================================================

class WozImage:
    """
    WOZ 2.0 image under construction.

    The chunks start empty. build() fills all four from a track list and
    may only be called once; to_bytes() and save() serialize the result.

    Attributes:
        info: INFO chunk
        tmap: TMAP chunk
        trks: TRKS chunk
        writ: WRIT chunk
    """

    def __init__(self):
        self.info = WozChunk(CHUNK_INFO)
        self.tmap = WozChunk(CHUNK_TMAP)
        self.trks = WozChunk(CHUNK_TRKS)
        self.writ = WozChunk(CHUNK_WRIT)
        self._track_count = 0

    @classmethod
    def from_tracks(cls, tracks: Sequence[TrackData],
                    info: Optional[DiskInfo] = None) -> 'WozImage':
        image = cls()
        image.build(tracks, info)
        return image

    @property
    def chunks(self) -> tuple:
        """The four chunks in file order."""
        return (self.info, self.tmap, self.trks, self.writ)

    @property
    def track_count(self) -> int:
        return self._track_count

    @property
    def file_size(self) -> int:
        return WOZ_HEADER_SIZE + sum(chunk.size_on_disk for chunk in self.chunks)

    # =========================================================================
    # Building
    # =========================================================================

    def build(self, tracks: Sequence[TrackData],
              info: Optional[DiskInfo] = None) -> None:
        """
        Fill all four chunks from a list of tracks.

        Args:
            tracks: Encoded tracks, track 0 first
            info: INFO settings (defaults to DiskInfo())

        Raises:
            ImageGeometryError: If the track count cannot be laid out
            ImageFormatError: If the image was already built
        """
        if any(len(chunk) for chunk in self.chunks):
            raise ImageFormatError("Image has already been built")
        if not 1 <= len(tracks) <= MAX_TRACK_COUNT:
            raise ImageGeometryError(
                f"Track count must be between 1 and {MAX_TRACK_COUNT}",
                tracks=len(tracks),
            )

        info = info or DiskInfo()
        self._build_info(tracks, info)
        self._build_tmap(len(tracks))
        self._build_trks(tracks)
        self._build_writ(tracks)
        self._track_count = len(tracks)

        logger.debug(
            "Built WOZ image: %d tracks, %d bytes",
            self._track_count, self.file_size
        )

    def _build_info(self, tracks: Sequence[TrackData], info: DiskInfo) -> None:
        chunk = self.info
        chunk.write_uint8(info.version)
        chunk.write_uint8(info.disk_type)
        chunk.write_uint8(int(info.write_protected))
        chunk.write_uint8(int(info.synchronized))
        chunk.write_uint8(int(info.cleaned))
        chunk.write_utf8(info.creator, CREATOR_FIELD_SIZE)
        chunk.write_uint8(info.disk_sides)
        chunk.write_uint8(info.boot_sector_format)
        chunk.write_uint8(info.optimal_bit_timing)
        chunk.write_uint16(info.compatible_hardware)
        chunk.write_uint16(info.required_ram)
        chunk.write_uint16(max(track.block_count for track in tracks))
        # Remaining bytes are reserved and must be zero
        chunk.set_mark(INFO_CHUNK_SIZE)

    def _build_tmap(self, track_count: int) -> None:
        self.tmap.write_bytes(bytes(tmap_entries(track_count)))

    def _build_trks(self, tracks: Sequence[TrackData]) -> None:
        chunk = self.trks

        # Starting blocks count from the start of the file
        bits_offset = (
            WOZ_HEADER_SIZE
            + self.info.size_on_disk
            + self.tmap.size_on_disk
            + CHUNK_HEADER_SIZE
            + TRKS_BITS_OFFSET
        )
        if bits_offset % BITS_BLOCK_SIZE:
            raise ImageFormatError(
                f"Track data would start at byte {bits_offset}, "
                f"not on a {BITS_BLOCK_SIZE}-byte block boundary",
                chunk=CHUNK_TRKS,
            )

        starting_block = bits_offset // BITS_BLOCK_SIZE
        for track in tracks:
            chunk.write_uint16(starting_block)
            chunk.write_uint16(track.block_count)
            chunk.write_uint32(track.bit_count)
            starting_block += track.block_count

        chunk.set_mark(TRKS_BITS_OFFSET)
        for track in tracks:
            chunk.write_bytes(track.data)
            chunk.advance_mark(track.block_count * BITS_BLOCK_SIZE - len(track.data))

    def _build_writ(self, tracks: Sequence[TrackData]) -> None:
        chunk = self.writ
        for index, track in enumerate(tracks):
            chunk.write_uint8(write_subtrack_for(index))
            chunk.write_uint8(WRIT_COMMANDS_PER_TRACK)
            chunk.write_uint8(WRIT_FLAG_CLEAR_FIRST)
            chunk.write_uint8(0)                        # Reserved
            chunk.write_uint32(crc32(track.valid_bytes))

            # Single write command covering the whole track
            chunk.write_uint32(0)                       # Start bit
            chunk.write_uint32(track.bit_count)
            chunk.write_uint8(0x00)                     # Leader nibble
            chunk.write_uint8(0)                        # Leader nibble bit count
            chunk.write_uint8(0)                        # Leader count
            chunk.write_uint8(0)                        # Reserved

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_bytes(self) -> bytes:
        """
        Serialize the image.

        Returns:
            Complete file contents with the header CRC filled in

        Raises:
            ImageFormatError: If the image has not been built
        """
        if not self._track_count:
            raise ImageFormatError("Image has no tracks; call build() first")

        output = bytearray(WOZ_HEADER_PREFIX)
        output.extend(bytes(WOZ_HEADER_SIZE - len(WOZ_HEADER_PREFIX)))
        for chunk in self.chunks:
            output.extend(chunk.serialize())

        checksum = crc32(output[WOZ_HEADER_SIZE:])
        struct.pack_into('<I', output, WOZ_CRC_OFFSET, checksum)
        return bytes(output)

    def save(self, filepath: Union[str, Path]) -> None:
        """
        Save the image to a file.

        The whole file is assembled in memory first, then written through a
        temporary file so a failed write never leaves a partial image.

        Args:
            filepath: Path to save to

        Raises:
            ImageWriteError: If file cannot be written
        """
        logger.info("Saving WOZ image: %s", filepath)
        output = self.to_bytes()

        try:
            with AtomicOutputContext(filepath) as f:
                written = f.write(output)
                if written != len(output):
                    raise ImageWriteError(
                        f"Short write: {written} of {len(output)} bytes",
                        str(filepath),
                    )
        except OSError as e:
            raise ImageWriteError(f"Failed to write file: {e}", str(filepath)) from e

        logger.info("Saved WOZ: %d bytes", len(output))


def write_woz(tracks: Sequence[TrackData], filepath: Union[str, Path],
              info: Optional[DiskInfo] = None) -> None:
    """Build a WOZ image from `tracks` and save it to `filepath`."""
    WozImage.from_tracks(tracks, info).save(filepath)
