"""
Loading pictures into pixel buffers.

Two sources are supported:
    - .npy files: numpy arrays saved with numpy.save, shape (height, width)
      or (height, width, 3|4), 8-bit values
    - Any image file Qt can decode (BMP, PNG, JPEG, ...), read with
      PyQt6's QImage. PyQt6 is an optional dependency (the "image" extra).
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np

from picturedsk.imaging.image_formats import ImageReadError
from picturedsk.picture.sampling import as_pixel_array

logger = logging.getLogger(__name__)


NUMPY_EXTENSION = '.npy'
RGBA_CHANNELS = 4


def load_pixels(filepath: Union[str, Path]) -> np.ndarray:
    """
    Load a picture as an RGBA or RGB pixel buffer.

    Args:
        filepath: Picture file path

    Returns:
        uint8 array of shape (height, width, channels)

    Raises:
        ImageReadError: If the file is missing or cannot be decoded
    """
    path = Path(filepath)
    if not path.is_file():
        raise ImageReadError("Picture file not found", str(path))

    if path.suffix.lower() == NUMPY_EXTENSION:
        pixels = _load_numpy(path)
    else:
        pixels = _load_qimage(path)

    logger.info(
        "Loaded picture %s: %dx%d", path.name, pixels.shape[1], pixels.shape[0]
    )
    return pixels


def _load_numpy(path: Path) -> np.ndarray:
    try:
        array = np.load(path, allow_pickle=False)
    except (OSError, ValueError) as e:
        raise ImageReadError(f"Failed to read pixel array: {e}", str(path)) from e

    try:
        return as_pixel_array(array)
    except ValueError as e:
        raise ImageReadError(str(e), str(path)) from e


def _load_qimage(path: Path) -> np.ndarray:
    try:
        from PyQt6.QtGui import QImage
    except ImportError as e:
        raise ImageReadError(
            "Reading image files requires PyQt6 "
            "(pip install picturedsk[image]); .npy arrays work without it",
            str(path),
        ) from e

    image = QImage(str(path))
    if image.isNull():
        raise ImageReadError("Unsupported or corrupt image file", str(path))

    image = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width, height = image.width(), image.height()
    bytes_per_line = image.bytesPerLine()

    bits = image.constBits()
    bits.setsize(image.sizeInBytes())

    # Rows may be padded past width * 4 bytes
    rows = np.frombuffer(bits, dtype=np.uint8).reshape(height, bytes_per_line)
    return rows[:, :width * RGBA_CHANNELS].reshape(height, width, RGBA_CHANNELS).copy()
