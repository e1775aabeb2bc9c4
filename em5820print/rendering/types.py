from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class GrayscaleBuffer:
    """Row-major luminance values in [0, 1] (0 = black, 1 = white)."""

    values: List[float]
    width: int
    height: int

    def validate(self) -> None:
        if self.width <= 0 or self.height < 0:
            raise ValueError("Invalid grayscale buffer dimensions")
        if len(self.values) != self.width * self.height:
            raise ValueError("Grayscale buffer length must equal width * height")
