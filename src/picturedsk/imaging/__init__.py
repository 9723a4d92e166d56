"""
WOZ 2.0 image writing for PictureDSK.

This module assembles encoded tracks into a WOZ 2.0 container: the
INFO, TMAP, TRKS and WRIT chunks behind a checksummed file header.

Classes:
    WozImage: Four-chunk image under construction
    WozChunk: Growable tagged byte buffer

Exceptions:
    ImageError: Base exception for image errors
    ImageFormatError: Image content cannot be laid out
    ImageGeometryError: Track set does not fit the disk layout
    ImageReadError: Failed to read an input file
    ImageWriteError: Failed to write an image file
"""

from .image_formats import (
    ImageError,
    ImageFormatError,
    ImageGeometryError,
    ImageReadError,
    ImageWriteError,
    WOZ2_MAGIC,
    WOZ_EXTENSION,
    CHUNK_ORDER,
    INFO_CHUNK_SIZE,
)
from .crc import CRC32Calculator, crc32
from .chunk import WozChunk
from .woz_image import (
    WozImage,
    write_woz,
    tmap_entries,
    write_subtrack_for,
    MAX_TRACK_COUNT,
)

__all__ = [
    # Exceptions
    "ImageError",
    "ImageFormatError",
    "ImageGeometryError",
    "ImageReadError",
    "ImageWriteError",

    # Constants
    "WOZ2_MAGIC",
    "WOZ_EXTENSION",
    "CHUNK_ORDER",
    "INFO_CHUNK_SIZE",
    "MAX_TRACK_COUNT",

    # Checksums
    "CRC32Calculator",
    "crc32",

    # Image building
    "WozChunk",
    "WozImage",
    "write_woz",
    "tmap_entries",
    "write_subtrack_for",
]
