from __future__ import annotations

from typing import List, NamedTuple

from .converters.base import RasterImage
from .grayscale import pixel_luminance
from .types import GrayscaleBuffer

DOT_WIDTH = 384


class ScaledSize(NamedTuple):
    """Target size plus the scale factor as the exact ratio ``numerator / denominator``."""

    width: int
    height: int
    numerator: int
    denominator: int

    @property
    def scale(self) -> float:
        return self.numerator / self.denominator


def scaled_size(width: int, height: int, max_width: int = DOT_WIDTH) -> ScaledSize:
    """Fit ``width`` x ``height`` into ``max_width`` dots, never upscaling.

    The width is rounded down to a multiple of 8 (minimum 8); the height
    keeps the proportional value (minimum 1).
    """
    if width <= 0 or height <= 0:
        raise ValueError("Source dimensions must be greater than zero")
    if max_width < 8:
        raise ValueError("Maximum width must be at least 8 dots")
    if width > max_width:
        numerator, denominator = max_width, width
    else:
        numerator, denominator = 1, 1
    scaled_width = width * numerator // denominator
    scaled_height = height * numerator // denominator
    scaled_width -= scaled_width % 8
    if scaled_width == 0:
        scaled_width = 8
    # a very wide, short source can floor to zero rows; keep one printable row
    return ScaledSize(scaled_width, max(1, scaled_height), numerator, denominator)


def source_coordinate(dest: int, size: ScaledSize, source_dim: int) -> int:
    """Nearest-neighbour source index for destination index ``dest``."""
    src = dest * size.denominator // size.numerator
    return min(max(src, 0), source_dim - 1)


def scale_to_grayscale(raster: RasterImage, max_width: int = DOT_WIDTH) -> GrayscaleBuffer:
    """Resample ``raster`` to the device width and convert it to luminance."""
    raster.validate()
    size = scaled_size(raster.width, raster.height, max_width)
    columns = [source_coordinate(x, size, raster.width) for x in range(size.width)]
    values: List[float] = []
    for y in range(size.height):
        src_y = source_coordinate(y, size, raster.height)
        values.extend(pixel_luminance(raster, src_x, src_y) for src_x in columns)
    return GrayscaleBuffer(values, size.width, size.height)
