"""
WOZ 2.0 image format constants and exceptions.

This module collects the fixed byte values of the WOZ container (magic,
chunk tags, fixed chunk sizes) and the exception hierarchy raised while
building and writing images.

Reference: https://applesaucefdc.com/woz/reference2/
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


# =============================================================================
# Custom Exceptions
# =============================================================================

class ImageError(Exception):
    """Base exception for image-related errors."""

    def __init__(self, message: str, filepath: Optional[str] = None):
        self.message = message
        self.filepath = filepath
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.filepath:
            return f"{self.message} [File: {self.filepath}]"
        return self.message


class ImageFormatError(ImageError):
    """Raised when image content cannot be laid out in the WOZ format."""

    def __init__(self, message: str, filepath: Optional[str] = None,
                 chunk: Optional[str] = None):
        self.chunk = chunk
        super().__init__(message, filepath)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.chunk:
            return f"{base} [Chunk: {self.chunk}]"
        return base


class ImageGeometryError(ImageError):
    """Raised when the track set does not fit the fixed disk layout."""

    def __init__(self, message: str, filepath: Optional[str] = None,
                 tracks: Optional[int] = None):
        self.tracks = tracks
        super().__init__(message, filepath)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.tracks is not None:
            return f"{base} [Tracks: {self.tracks}]"
        return base


class ImageReadError(ImageError):
    """Raised when reading an input file fails."""
    pass


class ImageWriteError(ImageError):
    """Raised when writing an image file fails."""
    pass


# =============================================================================
# Constants
# =============================================================================

# File header: "WOZ2", 0xFF, LF CR LF, then CRC32 of the rest of the file
WOZ2_MAGIC = b'WOZ2'
WOZ_HIGH_BIT_MARKER = 0xFF
WOZ_LINE_ENDINGS = b'\x0A\x0D\x0A'
WOZ_HEADER_PREFIX = WOZ2_MAGIC + bytes((WOZ_HIGH_BIT_MARKER,)) + WOZ_LINE_ENDINGS
WOZ_HEADER_SIZE = 12
WOZ_CRC_OFFSET = 8

# Chunk tags, in the order they are written
CHUNK_INFO = 'INFO'
CHUNK_TMAP = 'TMAP'
CHUNK_TRKS = 'TRKS'
CHUNK_WRIT = 'WRIT'
CHUNK_ORDER = (CHUNK_INFO, CHUNK_TMAP, CHUNK_TRKS, CHUNK_WRIT)
CHUNK_HEADER_SIZE = 8

# Fixed chunk layouts
INFO_CHUNK_SIZE = 60
TMAP_ENTRY_COUNT = 160
TMAP_EMPTY = 0xFF
TRK_ENTRY_SIZE = 8
TRKS_BITS_OFFSET = TMAP_ENTRY_COUNT * TRK_ENTRY_SIZE  # 1280

# WRIT chunk
WRIT_FLAG_CLEAR_FIRST = 0x01
WRIT_COMMANDS_PER_TRACK = 1

WOZ_EXTENSION = '.woz'
