"""
Packing pictures into the Apple II hi-res screen format.

The picture is sampled onto a 147 x 147 monochrome grid. Each screen byte
holds 7 pixels, leftmost pixel in the lowest bit, with the high (palette)
bit set. Rows are 21 bytes long and stored top to bottom with no gaps;
the boot loader places them on the real screen rows.
"""

import logging

import numpy as np

from picturedsk.picture.sampling import as_pixel_array, sample_greyscale

logger = logging.getLogger(__name__)


SCREEN_DIMENSION = 147
PIXELS_PER_BYTE = 7
SCREEN_STRIDE = SCREEN_DIMENSION // PIXELS_PER_BYTE   # 21 bytes
HIRES_IMAGE_SIZE = SCREEN_STRIDE * SCREEN_DIMENSION   # 3087 bytes
HIRES_PALETTE_BIT = 0x80

# Pixels at or above this greyscale value are lit
PIXEL_ON_THRESHOLD = 0.5

_BIT_WEIGHTS = 1 << np.arange(PIXELS_PER_BYTE)


def pack_hires_screen(pixels: np.ndarray) -> bytes:
    """
    Sample a picture and pack it into hi-res screen bytes.

    Args:
        pixels: Pixel buffer of any size

    Returns:
        HIRES_IMAGE_SIZE (3087) bytes, row by row
    """
    pixels = as_pixel_array(pixels)

    steps = np.arange(SCREEN_DIMENSION, dtype=np.float32) / np.float32(SCREEN_DIMENSION)
    u, v = np.meshgrid(steps, steps)
    lit = sample_greyscale(pixels, u, v) >= PIXEL_ON_THRESHOLD

    groups = lit.reshape(SCREEN_DIMENSION, SCREEN_STRIDE, PIXELS_PER_BYTE)
    packed = (groups * _BIT_WEIGHTS).sum(axis=2) | HIRES_PALETTE_BIT

    logger.debug(
        "Packed %dx%d picture into hi-res screen (%d of %d pixels lit)",
        pixels.shape[1], pixels.shape[0], int(lit.sum()), lit.size
    )
    return packed.astype(np.uint8).tobytes()
