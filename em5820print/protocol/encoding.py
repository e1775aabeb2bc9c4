from __future__ import annotations

from typing import Iterator, Sequence, Tuple

from .types import Bitmap

DEFAULT_BATCH_LINES = 50


def pack_line(line: Sequence[int]) -> bytes:
    """Pack a 1-bit line into bytes, MSB first, padding the last byte with 0."""
    out = bytearray()
    for i in range(0, len(line), 8):
        chunk = list(line[i : i + 8])
        if len(chunk) < 8:
            chunk = chunk + [0] * (8 - len(chunk))
        value = 0
        for bit, pix in enumerate(chunk):
            if pix:
                value |= 1 << (7 - bit)
        out.append(value)
    return bytes(out)


def batch_ranges(height: int, lines_per_batch: int = DEFAULT_BATCH_LINES) -> Iterator[Tuple[int, int]]:
    """Yield ``(start, stop)`` row ranges covering ``height`` rows."""
    if lines_per_batch <= 0:
        raise ValueError("Lines per batch must be greater than zero")
    for start in range(0, height, lines_per_batch):
        yield start, min(height, start + lines_per_batch)


def split_rows(bitmap: Bitmap, lines_per_batch: int = DEFAULT_BATCH_LINES) -> Iterator[Tuple[int, bytes]]:
    """Yield ``(row_count, packed_bytes)`` for each batch of a bitmap."""
    bitmap.validate()
    for start, stop in batch_ranges(bitmap.height, lines_per_batch):
        yield stop - start, bitmap.rows(start, stop)
