"""
PictureDSK - picture disks for the Apple II.

Encodes sector data into Apple II 16-sector GCR track bitstreams and
packages tracks into WOZ 2.0 disk images. On top of that core, builds
"picture disks": bootable disks that show a picture on the hi-res screen
and whose flux pattern draws the same picture across the disk surface.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from picturedsk.core.geometry import SectorFormat, TrackData
from picturedsk.core.settings import DiskInfo, load_disk_info

from picturedsk.codec import (
    EncodingError,
    encode_6_and_2,
    encode_track,
    encode_track_data,
)

from picturedsk.imaging import (
    ImageError,
    ImageFormatError,
    ImageGeometryError,
    ImageReadError,
    ImageWriteError,
    WozImage,
    crc32,
    write_woz,
)

from picturedsk.picture import build_picture_disk, load_pixels

# Re-export main entry point
from picturedsk.main import main

__all__ = [
    # Main entry point
    "main",

    # Core
    "SectorFormat",
    "TrackData",
    "DiskInfo",
    "load_disk_info",

    # Codec
    "EncodingError",
    "encode_6_and_2",
    "encode_track",
    "encode_track_data",

    # Imaging
    "ImageError",
    "ImageFormatError",
    "ImageGeometryError",
    "ImageReadError",
    "ImageWriteError",
    "WozImage",
    "crc32",
    "write_woz",

    # Pictures
    "build_picture_disk",
    "load_pixels",
]
