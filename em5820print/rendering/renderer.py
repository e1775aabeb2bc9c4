from __future__ import annotations

import logging

from ..protocol.types import Bitmap
from .converters import load_raster
from .converters.base import RasterImage
from .dither import floyd_steinberg
from .scaling import DOT_WIDTH, scale_to_grayscale, scaled_size

logger = logging.getLogger(__name__)


def raster_to_bitmap(raster: RasterImage, max_width: int = DOT_WIDTH) -> Bitmap:
    raster.validate()
    size = scaled_size(raster.width, raster.height, max_width)
    if size.denominator != size.numerator:
        logger.info("Scaling image by %.4f to fit printer width", size.scale)
    logger.info("Scaled size: %dx%d", size.width, size.height)
    gray = scale_to_grayscale(raster, max_width)
    logger.info("Applying Floyd-Steinberg dithering...")
    return floyd_steinberg(gray)


def image_to_bitmap(path: str, max_width: int = DOT_WIDTH) -> Bitmap:
    raster = load_raster(path)
    logger.info("Loaded image: %dx%d (%d channels)", raster.width, raster.height, raster.channels)
    bitmap = raster_to_bitmap(raster, max_width)
    logger.info("Final bitmap: %dx%d (%d bytes)", bitmap.width, bitmap.height, len(bitmap.data))
    return bitmap
