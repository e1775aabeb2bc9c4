from __future__ import annotations

from typing import Union

from .types import Alignment, BitmapMode, PrintStyle

ESC = 0x1B
GS = 0x1D


def _byte(value: int, name: str) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in range 0-255, got {value}")
    return value


def _u16le(value: int, name: str) -> bytes:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} must be in range 0-65535, got {value}")
    return value.to_bytes(2, "little", signed=False)


def reset_cmd() -> bytes:
    """Build ESC @ (initialize printer)."""
    return bytes([ESC, 0x40])


def text_scale_cmd(horizontal: int, vertical: int) -> bytes:
    """Build GS ! with both size multipliers packed into one byte."""
    scale = (vertical & 0x0F) | ((horizontal & 0x0F) << 4)
    return bytes([GS, 0x21, scale])


def print_style_cmd(style: Union[PrintStyle, int]) -> bytes:
    """Build ESC ! with the given print mode bits."""
    return bytes([ESC, 0x21, _byte(int(style), "style")])


def feed_dots_cmd(dots: int) -> bytes:
    """Build ESC J (print and feed ``dots`` dot rows)."""
    return bytes([ESC, 0x4A, _byte(dots, "dots")])


def feed_lines_cmd(lines: int) -> bytes:
    """Build ESC d (print and feed ``lines`` text lines)."""
    return bytes([ESC, 0x64, _byte(lines, "lines")])


def horizontal_position_cmd(position: int) -> bytes:
    """Build ESC $ (absolute horizontal print position in dots)."""
    return bytes([ESC, 0x24]) + _u16le(position, "position")


def alignment_cmd(alignment: Alignment) -> bytes:
    """Build ESC a (justification)."""
    return bytes([ESC, 0x61, Alignment(alignment).value])


def underline_cmd(thickness: int) -> bytes:
    """Build ESC - ; thickness above 2 is clamped to 2."""
    if thickness < 0:
        raise ValueError(f"thickness must not be negative, got {thickness}")
    return bytes([ESC, 0x2D, min(thickness, 2)])


def bitmap_header_cmd(mode: BitmapMode, width: int, height: int) -> bytes:
    """Build the GS v 0 raster header.

    ``width`` is in dots and is sent as a byte count; ``height`` is in dot
    rows. Both fields are 16-bit little-endian.
    """
    header = bytes([GS, 0x76, 0x30, BitmapMode(mode).value])
    return header + _u16le(width // 8, "width") + _u16le(height, "height")


def text_cmd(text: Union[str, bytes], encoding: str = "utf-8") -> bytes:
    """Return the literal bytes of ``text``; no escaping is applied."""
    if isinstance(text, str):
        return text.encode(encoding)
    return bytes(text)
