from .commands import (
    alignment_cmd,
    bitmap_header_cmd,
    feed_dots_cmd,
    feed_lines_cmd,
    horizontal_position_cmd,
    print_style_cmd,
    reset_cmd,
    text_cmd,
    text_scale_cmd,
    underline_cmd,
)
from .encoding import DEFAULT_BATCH_LINES, batch_ranges, pack_line, split_rows
from .types import Alignment, Bitmap, BitmapMode, PrintStyle

__all__ = [
    "Alignment",
    "alignment_cmd",
    "batch_ranges",
    "Bitmap",
    "bitmap_header_cmd",
    "BitmapMode",
    "DEFAULT_BATCH_LINES",
    "feed_dots_cmd",
    "feed_lines_cmd",
    "horizontal_position_cmd",
    "pack_line",
    "print_style_cmd",
    "PrintStyle",
    "reset_cmd",
    "split_rows",
    "text_cmd",
    "text_scale_cmd",
    "underline_cmd",
]
