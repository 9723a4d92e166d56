"""
Texture sampling of RGBA pixel buffers.

Pixels are numpy arrays of shape (height, width, channels) with 8-bit
sRGB channels; only the first three channels are read. Sampling uses
texture coordinates: (0, 0) is the top-left corner, (1, 1) the
bottom-right, and coordinates outside that range are clamped to the edge.

The greyscale value of a sample is the luminance of the nearest pixel,
computed in linear light and converted back to sRGB, then rounded to
pure black (0.0) or pure white (1.0).

Uses numpy for vectorized sampling: a whole track or screen is sampled
in one call.
"""

import logging
from typing import Union

import numpy as np

logger = logging.getLogger(__name__)


# Rec. 709 luminance weights, applied to linear RGB
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])

# sRGB transfer function breakpoints
SRGB_LINEAR_THRESHOLD = 0.04045
LINEAR_SRGB_THRESHOLD = 0.0031308

ArrayLike = Union[float, np.ndarray]


# =============================================================================
# Colour Space Conversion
# =============================================================================

def srgb_to_linear(x: np.ndarray) -> np.ndarray:
    """Convert sRGB values in [0, 1] to linear light."""
    x = np.asarray(x, dtype=np.float64)
    return np.where(
        x < SRGB_LINEAR_THRESHOLD,
        x / 12.92,
        np.power((x + 0.055) / 1.055, 2.4),
    )


def linear_to_srgb(y: np.ndarray) -> np.ndarray:
    """Convert linear light values in [0, 1] to sRGB."""
    y = np.asarray(y, dtype=np.float64)
    return np.where(
        y <= LINEAR_SRGB_THRESHOLD,
        12.92 * y,
        1.055 * np.power(np.maximum(y, 0.0), 1.0 / 2.4) - 0.055,
    )


# =============================================================================
# Pixel Buffers
# =============================================================================

def as_pixel_array(pixels) -> np.ndarray:
    """
    Validate and normalize a pixel buffer.

    Accepts (height, width) greyscale or (height, width, 3|4) colour
    arrays of 8-bit values.

    Returns:
        uint8 array of shape (height, width, channels >= 3)

    Raises:
        ValueError: If the array shape or value range is unusable
    """
    array = np.asarray(pixels)
    if array.ndim == 2:
        array = np.repeat(array[:, :, np.newaxis], 3, axis=2)
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValueError(
            f"Pixels must have shape (height, width[, 3 or 4]), got {array.shape}"
        )
    if array.shape[0] == 0 or array.shape[1] == 0:
        raise ValueError("Pixel buffer is empty")

    if array.dtype != np.uint8:
        if array.size and (array.min() < 0 or array.max() > 255):
            raise ValueError("Pixel values must be in the range 0-255")
        array = array.astype(np.uint8)
    return array


def sample_greyscale(pixels: np.ndarray, u: ArrayLike, v: ArrayLike) -> ArrayLike:
    """
    Sample the greyscale value of a pixel buffer at texture coordinates.

    Args:
        pixels: Pixel buffer (see as_pixel_array)
        u: Horizontal coordinate(s), 0.0 = left edge
        v: Vertical coordinate(s), 0.0 = top edge

    Returns:
        0.0 or 1.0 for each (u, v) pair; a float for scalar input,
        otherwise an array of the broadcast shape of u and v
    """
    pixels = as_pixel_array(pixels)
    height, width = pixels.shape[:2]

    # Texture coordinates are single precision
    u = np.clip(np.asarray(u, dtype=np.float32), 0.0, 1.0).astype(np.float32)
    v = np.clip(np.asarray(v, dtype=np.float32), 0.0, 1.0).astype(np.float32)

    # A coordinate of exactly 1.0 maps to the last pixel, not past it
    x = np.minimum((u * np.float32(width)).astype(np.intp), width - 1)
    y = np.minimum((v * np.float32(height)).astype(np.intp), height - 1)

    rgb = pixels[y, x, :3].astype(np.float64) / 255.0
    grey_linear = srgb_to_linear(rgb) @ LUMINANCE_WEIGHTS
    grey = linear_to_srgb(grey_linear)

    # Round half up
    result = np.floor(grey + 0.5)
    if result.ndim == 0:
        return float(result)
    return result
