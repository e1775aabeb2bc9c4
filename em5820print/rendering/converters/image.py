from __future__ import annotations

from PIL import Image, ImageOps, UnidentifiedImageError

from ...errors import DecodeFailure
from .base import ImageDecoder, RasterImage

_MODE_CHANNELS = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}


class PillowDecoder(ImageDecoder):
    def load(self, path: str) -> RasterImage:
        try:
            img = self._load_image(path)
            img = self._normalize_image(img)
            raster = RasterImage(img.width, img.height, _MODE_CHANNELS[img.mode], img.tobytes())
        except FileNotFoundError:
            raise DecodeFailure(path, "file not found") from None
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeFailure(path, str(exc) or exc.__class__.__name__) from exc
        raster.validate()
        return raster

    @staticmethod
    def _load_image(path: str) -> Image.Image:
        with Image.open(path) as img:
            img = ImageOps.exif_transpose(img)
            return img.copy()

    @staticmethod
    def _normalize_image(img: Image.Image) -> Image.Image:
        if img.mode in _MODE_CHANNELS:
            return img
        if img.mode == "P" and "transparency" in img.info:
            return img.convert("RGBA")
        if img.mode in ("PA", "RGBa", "La"):
            return img.convert("RGBA")
        return img.convert("RGB")
