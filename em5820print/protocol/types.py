from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag


class Alignment(IntEnum):
    LEFT = 0
    CENTER = 1
    RIGHT = 2


class BitmapMode(IntEnum):
    """Device-side scaling of a raster bitmap (GS v 0 ``m`` parameter)."""

    NORMAL = 0
    WIDE = 1
    TALL = 2
    HUGE = 3


class PrintStyle(IntFlag):
    """Bits of the ESC ! print mode byte.

    ``FONT_9X17`` selects the alternate 9x17 glyph set; leaving it clear
    selects the default 12x24 font.
    """

    NONE = 0x00
    FONT_9X17 = 0x01
    BOLD = 0x08
    DOUBLE_HEIGHT = 0x10
    DOUBLE_WIDE = 0x20
    UNDERLINE = 0x80


@dataclass(frozen=True)
class Bitmap:
    """Packed 1-bit raster, MSB-first, 1 = dot."""

    data: bytes
    width: int
    height: int

    def validate(self) -> None:
        """Validate dimensions against the packed buffer."""
        if self.width <= 0:
            raise ValueError("Width must be greater than zero")
        if self.height < 0:
            raise ValueError("Height must not be negative")
        if len(self.data) != self.bytes_per_row * self.height:
            raise ValueError("Bitmap data length must equal bytes per row times height")

    @property
    def bytes_per_row(self) -> int:
        return (self.width + 7) // 8

    def rows(self, start: int, stop: int) -> bytes:
        """Return the packed bytes for rows ``start`` up to ``stop``."""
        start = max(0, start)
        stop = min(self.height, stop)
        return bytes(self.data[start * self.bytes_per_row : stop * self.bytes_per_row])
