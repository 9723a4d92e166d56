"""
Picture disk generation for PictureDSK.

This module turns a picture into the tracks of a bootable disk: the
picture is packed into the hi-res screen format for track 0 and drawn
across the remaining tracks as a polar texture.
"""

from picturedsk.picture.sampling import (
    as_pixel_array,
    sample_greyscale,
    srgb_to_linear,
    linear_to_srgb,
)

from picturedsk.picture.hires import (
    pack_hires_screen,
    SCREEN_DIMENSION,
    HIRES_IMAGE_SIZE,
)

from picturedsk.picture.disk_builder import (
    build_picture_disk,
    build_texture_track,
    build_track_zero_payload,
    format_display_message,
    PICTURE_TRACK_COUNT,
)

from picturedsk.picture.pixel_source import load_pixels

__all__ = [
    # Sampling
    "as_pixel_array",
    "sample_greyscale",
    "srgb_to_linear",
    "linear_to_srgb",

    # Hi-res screen
    "pack_hires_screen",
    "SCREEN_DIMENSION",
    "HIRES_IMAGE_SIZE",

    # Disk building
    "build_picture_disk",
    "build_texture_track",
    "build_track_zero_payload",
    "format_display_message",
    "PICTURE_TRACK_COUNT",

    # Input
    "load_pixels",
]
