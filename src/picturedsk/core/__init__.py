"""
Core definitions for PictureDSK.

This module provides the fixed Apple II 16-sector disk layout, the
TrackData container passed between the encoder and the image writer,
and the validated INFO chunk settings.
"""

from picturedsk.core.geometry import (
    SectorFormat,
    TrackData,
    block_count_for,
    SECTORS_PER_TRACK,
    BYTES_PER_SECTOR,
    BYTES_PER_TRACK,
    BITS_BLOCK_SIZE,
    BITS_BLOCKS_PER_TRACK,
    BITS_TRACK_SIZE,
    BITS_TRACK_CAPACITY,
    GCR_SECTOR_ENCODED_SIZE,
    DOS_VOLUME_NUMBER,
)

from picturedsk.core.settings import (
    DiskInfo,
    load_disk_info,
    save_disk_info,
    DEFAULT_CREATOR,
)

__all__ = [
    # Geometry
    "SectorFormat",
    "TrackData",
    "block_count_for",
    "SECTORS_PER_TRACK",
    "BYTES_PER_SECTOR",
    "BYTES_PER_TRACK",
    "BITS_BLOCK_SIZE",
    "BITS_BLOCKS_PER_TRACK",
    "BITS_TRACK_SIZE",
    "BITS_TRACK_CAPACITY",
    "GCR_SECTOR_ENCODED_SIZE",
    "DOS_VOLUME_NUMBER",

    # Settings
    "DiskInfo",
    "load_disk_info",
    "save_disk_info",
    "DEFAULT_CREATOR",
]
