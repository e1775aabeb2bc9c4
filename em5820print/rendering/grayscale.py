from __future__ import annotations

from .converters.base import RasterImage

LUMA_RED = 0.299
LUMA_GREEN = 0.587
LUMA_BLUE = 0.114
GAMMA = 2.2


def luminance(r: int, g: int, b: int) -> float:
    """Return gamma-corrected luminance in [0, 1] for an 8-bit RGB triple."""
    gray = (LUMA_RED * r + LUMA_GREEN * g + LUMA_BLUE * b) / 255.0
    return min(1.0, gray) ** (1.0 / GAMMA)


def pixel_luminance(raster: RasterImage, x: int, y: int) -> float:
    """Luminance of pixel (x, y); alpha channels are ignored, not composited."""
    idx = (y * raster.width + x) * raster.channels
    pixels = raster.pixels
    if raster.channels < 3:
        value = pixels[idx]
        return luminance(value, value, value)
    return luminance(pixels[idx], pixels[idx + 1], pixels[idx + 2])
