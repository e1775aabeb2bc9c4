from .converters import SUPPORTED_EXTENSIONS, RasterImage, load_raster
from .dither import FLOYD_STEINBERG, floyd_steinberg
from .grayscale import luminance, pixel_luminance
from .renderer import image_to_bitmap, raster_to_bitmap
from .scaling import DOT_WIDTH, ScaledSize, scale_to_grayscale, scaled_size, source_coordinate
from .types import GrayscaleBuffer

__all__ = [
    "DOT_WIDTH",
    "FLOYD_STEINBERG",
    "floyd_steinberg",
    "GrayscaleBuffer",
    "image_to_bitmap",
    "load_raster",
    "luminance",
    "pixel_luminance",
    "raster_to_bitmap",
    "RasterImage",
    "scale_to_grayscale",
    "ScaledSize",
    "scaled_size",
    "source_coordinate",
    "SUPPORTED_EXTENSIONS",
]
