from __future__ import annotations

from dataclasses import dataclass

VALID_CHANNELS = (1, 2, 3, 4)


@dataclass(frozen=True)
class RasterImage:
    """Decoded image: row-major, channel-interleaved 8-bit samples."""

    width: int
    height: int
    channels: int
    pixels: bytes

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Image dimensions must be greater than zero")
        if self.channels not in VALID_CHANNELS:
            raise ValueError(f"Unsupported channel count: {self.channels}")
        if len(self.pixels) != self.width * self.height * self.channels:
            raise ValueError("Pixel buffer length does not match width * height * channels")


class ImageDecoder:
    def load(self, path: str) -> RasterImage:
        raise NotImplementedError
