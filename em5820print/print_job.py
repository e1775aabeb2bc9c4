from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .models import PrinterModel, default_model
from .protocol import commands
from .protocol.types import Alignment, Bitmap, BitmapMode, PrintStyle
from .rendering.renderer import image_to_bitmap
from .transport.session import TransportSession

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_FEED_LINES = 5
DEFAULT_TEXT_FEED_LINES = 2
TEXT_TRAILER = "\n\n"


@dataclass
class PrintSettings:
    alignment: Alignment = Alignment.CENTER
    bitmap_mode: BitmapMode = BitmapMode.NORMAL
    feed_lines: int = DEFAULT_IMAGE_FEED_LINES
    batch_lines: Optional[int] = None


@dataclass
class TextOptions:
    bold: bool = False
    underline: bool = False
    double_width: bool = False
    double_height: bool = False
    alignment: Alignment = Alignment.LEFT
    feed_lines: int = DEFAULT_TEXT_FEED_LINES

    @property
    def style(self) -> PrintStyle:
        style = PrintStyle.NONE
        if self.bold:
            style |= PrintStyle.BOLD
        if self.underline:
            style |= PrintStyle.UNDERLINE
        if self.double_width:
            style |= PrintStyle.DOUBLE_WIDE
        if self.double_height:
            style |= PrintStyle.DOUBLE_HEIGHT
        return style


class ImagePrintJob:
    def __init__(self, model: Optional[PrinterModel] = None, settings: Optional[PrintSettings] = None) -> None:
        self.model = model or default_model()
        self.settings = settings or PrintSettings()

    def render(self, path: str) -> Bitmap:
        return image_to_bitmap(path, self.model.dot_width)

    def run(self, session: TransportSession, bitmap: Bitmap) -> int:
        feed = commands.feed_lines_cmd(self.settings.feed_lines)
        total = session.reset()
        logger.info("Printing image...")
        total += session.set_alignment(self.settings.alignment)
        total += session.print_bitmap_lines(
            self.settings.bitmap_mode, bitmap, self.settings.batch_lines
        )
        logger.info("Feeding paper...")
        total += session.write_bytes(feed)
        total += session.reset()
        return total


class TextPrintJob:
    def __init__(self, options: Optional[TextOptions] = None) -> None:
        self.options = options or TextOptions()

    def run(self, session: TransportSession, lines: Iterable[Union[str, bytes]]) -> int:
        """Print ``lines`` joined by newlines, followed by two blank lines."""
        feed = commands.feed_lines_cmd(self.options.feed_lines)
        total = session.reset()
        total += session.set_alignment(self.options.alignment)
        style = self.options.style
        if style:
            total += session.set_print_style(style)
        first = True
        for line in lines:
            if not first:
                total += session.write_text("\n")
            total += session.write_text(line)
            first = False
        total += session.write_text(TEXT_TRAILER)
        total += session.write_bytes(feed)
        total += session.reset()
        return total
