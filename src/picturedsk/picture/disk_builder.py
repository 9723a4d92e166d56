"""
Picture disk builder.

Builds the track set of a picture disk: a disk that boots to show the
picture on the hi-res screen and, viewed as a flux image, shows the same
picture drawn across its surface.

Disk layout:
    - Track 0: a normal 16-sector DOS 3.3 track holding the boot loader,
      the packed hi-res screen and the display message
    - Tracks 1-45: raw bit patterns, not sectors. The picture is sampled
      along a circle whose radius shrinks from the outer edge of the disk
      inward, one circle per track, and each sample becomes a byte of
      0xFF (light) or 0x96 (dark)

Key Functions:
    build_track_zero_payload: Assemble the 4096 bytes of track 0
    build_texture_track: Sample one picture track
    build_picture_disk: Build all 46 tracks
"""

import logging
import math
import time
from typing import List, Optional

import numpy as np

from picturedsk.codec.gcr_codec import encode_track_data
from picturedsk.core.geometry import (
    BITS_TRACK_SIZE,
    BYTES_PER_SECTOR,
    BYTES_PER_TRACK,
    SectorFormat,
    TrackData,
)
from picturedsk.picture.boot_sectors import (
    BOOT_1_SECTOR_0,
    BOOT_2_SECTOR_F,
    DISPLAY_MESSAGE_OFFSET,
    MAX_MESSAGE_LENGTH,
)
from picturedsk.picture.hires import HIRES_IMAGE_SIZE, pack_hires_screen
from picturedsk.picture.sampling import as_pixel_array, sample_greyscale
from picturedsk.utils.logging import log_operation, log_performance

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

PICTURE_TRACK_COUNT = 46

# Radius range of the picture tracks, as a fraction of the picture width.
# Matches the track spacing of flux visualisers.
OUTER_TRACK_RADIUS = 0.5
INNER_TRACK_RADIUS = 0.1415

TEXTURE_LIGHT = 0xFF
TEXTURE_DARK = 0x96
TEXTURE_THRESHOLD = 0.5

# Track 0 offsets
BOOT_1_OFFSET = 0x000
BOOT_2_OFFSET = 0xF00

# (screen offset, track offset) for each 256-byte slice of the packed
# screen. The loader reads them back consecutively to $B100.
SCREEN_SLICE_PLACEMENT = (
    (0x000, 0x800),
    (0x100, 0x100),
    (0x200, 0x900),
    (0x300, 0x200),
    (0x400, 0xA00),
    (0x500, 0x300),
    (0x600, 0xB00),
    (0x700, 0x400),
    (0x800, 0xC00),
    (0x900, 0x500),
    (0xA00, 0xD00),
    (0xB00, 0x600),
    (0xC00, 0xE00),   # Last 15 bytes of the screen
)

MESSAGE_TERMINATOR = b'\x0D\x0D\x00'


# =============================================================================
# Track 0
# =============================================================================

def format_display_message(message: str) -> bytes:
    """
    Convert a message to the bytes the boot loader prints.

    The message is cut to MAX_MESSAGE_LENGTH characters and upper-cased;
    characters the Apple II cannot print become spaces. Two carriage
    returns and a NUL terminate it.
    """
    characters = []
    for ch in message[:MAX_MESSAGE_LENGTH]:
        if 'a' <= ch <= 'z':
            ch = ch.upper()
        if not ' ' <= ch <= '_':
            ch = ' '
        characters.append(ch)
    return ''.join(characters).encode('ascii') + MESSAGE_TERMINATOR


def build_track_zero_payload(screen: bytes, message: Optional[str] = None) -> bytes:
    """
    Assemble the 16 logical sectors of track 0.

    Args:
        screen: Packed hi-res screen (HIRES_IMAGE_SIZE bytes)
        message: Text printed under the picture. None keeps the built-in
            message.

    Returns:
        BYTES_PER_TRACK bytes, logical sector order

    Raises:
        ValueError: If the screen is the wrong size
    """
    if len(screen) != HIRES_IMAGE_SIZE:
        raise ValueError(
            f"Screen must be {HIRES_IMAGE_SIZE} bytes, got {len(screen)}"
        )

    track = bytearray(BYTES_PER_TRACK)
    track[BOOT_1_OFFSET:BOOT_1_OFFSET + BYTES_PER_SECTOR] = BOOT_1_SECTOR_0
    for screen_offset, track_offset in SCREEN_SLICE_PLACEMENT:
        chunk = screen[screen_offset:screen_offset + BYTES_PER_SECTOR]
        track[track_offset:track_offset + len(chunk)] = chunk
    track[BOOT_2_OFFSET:BOOT_2_OFFSET + BYTES_PER_SECTOR] = BOOT_2_SECTOR_F

    if message is not None:
        text = format_display_message(message)
        start = BOOT_2_OFFSET + DISPLAY_MESSAGE_OFFSET
        track[start:start + len(text)] = text

    return bytes(track)


# =============================================================================
# Picture Tracks
# =============================================================================

def texture_track_radius(track_index: int,
                         track_count: int = PICTURE_TRACK_COUNT) -> float:
    """Sampling circle radius for a picture track (1 = outermost), in single precision."""
    radius_per_track = np.float32((OUTER_TRACK_RADIUS - INNER_TRACK_RADIUS) / (track_count - 1))
    inset = np.float32(track_index - 1) * radius_per_track
    return float(np.float32(OUTER_TRACK_RADIUS - float(inset)))


def build_texture_track(pixels: np.ndarray, track_index: int,
                        track_count: int = PICTURE_TRACK_COUNT) -> TrackData:
    """
    Sample the picture around one track.

    Byte k of the track is sampled at angle pi/2 + 2*pi*(N - k)/N, so the
    track starts at the top of the picture and runs clockwise, the
    direction the disk spins under the head.

    Args:
        pixels: Pixel buffer
        track_index: Track number (1 to track_count - 1)
        track_count: Total tracks on the disk

    Returns:
        TrackData of BITS_TRACK_SIZE bytes, every bit valid
    """
    if not 1 <= track_index < track_count:
        raise ValueError(
            f"Picture track index must be 1-{track_count - 1}, got {track_index}"
        )

    radius = np.float32(texture_track_radius(track_index, track_count))
    arc_segment = 2.0 * math.pi / BITS_TRACK_SIZE
    angles = math.pi / 2 + arc_segment * (BITS_TRACK_SIZE - np.arange(BITS_TRACK_SIZE))
    angles = angles.astype(np.float32)

    # Centre of the picture is (0.5, 0.5); v grows downwards
    u = (0.5 + (radius * np.cos(angles)).astype(np.float64)).astype(np.float32)
    v = (0.5 - (radius * np.sin(angles)).astype(np.float64)).astype(np.float32)

    grey = sample_greyscale(pixels, u, v)
    data = np.where(grey > TEXTURE_THRESHOLD, TEXTURE_LIGHT, TEXTURE_DARK)
    return TrackData(data.astype(np.uint8).tobytes())


# =============================================================================
# Whole Disk
# =============================================================================

def build_picture_disk(pixels: np.ndarray, message: Optional[str] = None,
                       track_count: int = PICTURE_TRACK_COUNT) -> List[TrackData]:
    """
    Build every track of a picture disk.

    Args:
        pixels: Pixel buffer of the picture
        message: Display message, or None for the built-in one
        track_count: Number of tracks (default 46)

    Returns:
        List of track_count TrackData, track 0 first
    """
    start_time = time.monotonic()
    pixels = as_pixel_array(pixels)

    screen = pack_hires_screen(pixels)
    payload = build_track_zero_payload(screen, message)
    tracks = [encode_track_data(payload, 0, SectorFormat.DOS_3_3)]
    log_operation(
        "encode_track", f"track 0: {tracks[0].bit_count} bits", logging.DEBUG
    )

    for track_index in range(1, track_count):
        tracks.append(build_texture_track(pixels, track_index, track_count))

    log_performance(
        "build_picture_disk", time.monotonic() - start_time,
        tracks=len(tracks), width=pixels.shape[1], height=pixels.shape[0],
    )
    return tracks
