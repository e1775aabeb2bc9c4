"""Floyd-Steinberg error diffusion to a packed 1-bit bitmap."""

from __future__ import annotations

from typing import List

from ..protocol.encoding import pack_line
from ..protocol.types import Bitmap
from .types import GrayscaleBuffer

THRESHOLD = 0.5

# (dx, dy, weight) in diffusion order.
FLOYD_STEINBERG = (
    (1, 0, 7.0 / 16.0),
    (-1, 1, 3.0 / 16.0),
    (0, 1, 5.0 / 16.0),
    (1, 1, 1.0 / 16.0),
)


def floyd_steinberg(buffer: GrayscaleBuffer) -> Bitmap:
    """Dither ``buffer`` into a bitmap where 1 marks a printed (dark) dot.

    The input is left untouched; diffusion runs on a private copy. Error
    that would land outside the image is dropped.
    """
    buffer.validate()
    width = buffer.width
    height = buffer.height
    work: List[float] = list(buffer.values)
    out = bytearray()
    for y in range(height):
        row = [0] * width
        base = y * width
        for x in range(width):
            old = work[base + x]
            new = 1.0 if old > THRESHOLD else 0.0
            if new == 0.0:
                row[x] = 1
            error = old - new
            if error == 0.0:
                continue
            for dx, dy, weight in FLOYD_STEINBERG:
                nx = x + dx
                ny = y + dy
                if 0 <= nx < width and ny < height:
                    work[ny * width + nx] += error * weight
        out += pack_line(row)
    return Bitmap(bytes(out), width, height)
