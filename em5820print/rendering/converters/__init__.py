from __future__ import annotations

import os
from typing import Dict, Optional, Set

from ...errors import DecodeFailure
from .base import ImageDecoder, RasterImage
from .image import PillowDecoder

SUPPORTED_EXTENSIONS: Set[str] = {".png", ".jpg", ".jpeg", ".bmp", ".tga", ".gif"}


class ImageLoader:
    def __init__(self, decoders: Optional[Dict[str, ImageDecoder]] = None) -> None:
        if decoders is None:
            decoder = PillowDecoder()
            decoders = {ext: decoder for ext in SUPPORTED_EXTENSIONS}
        self._decoders = decoders

    def load(self, path: str) -> RasterImage:
        ext = os.path.splitext(path)[1].lower()
        decoder = self._decoders.get(ext)
        if not decoder:
            supported = ", ".join(sorted(self._decoders))
            raise DecodeFailure(path, f"unsupported file extension '{ext}' (supported: {supported})")
        return decoder.load(path)


def load_raster(path: str) -> RasterImage:
    return ImageLoader().load(path)


__all__ = ["ImageDecoder", "ImageLoader", "PillowDecoder", "RasterImage", "SUPPORTED_EXTENSIONS", "load_raster"]
