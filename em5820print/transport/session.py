from __future__ import annotations

import enum
import logging
from types import TracebackType
from typing import Optional, Type, Union

from ..errors import SessionStateError, ShortTransfer
from ..models import PrinterModel, default_model
from ..protocol import commands
from ..protocol.encoding import split_rows
from ..protocol.types import Alignment, Bitmap, BitmapMode, PrintStyle
from .base import ByteTransport

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"


class TransportSession:
    """Orders commands and bitmap batches onto one printer connection.

    Every write first drains stale inbound bytes, then sends with the
    model's write timeout. A write that is not fully accepted raises
    :class:`ShortTransfer`; nothing is retried. Not thread-safe.
    """

    def __init__(self, transport: ByteTransport, model: Optional[PrinterModel] = None) -> None:
        self._transport = transport
        self._model = model or default_model()
        self._state = SessionState.CLOSED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def model(self) -> PrinterModel:
        return self._model

    def open(self) -> "TransportSession":
        if self._state is not SessionState.CLOSED:
            raise SessionStateError(f"Cannot open a session that is {self._state.value}")
        self._state = SessionState.OPENING
        try:
            self._transport.open()
        except BaseException:
            self._state = SessionState.CLOSED
            raise
        self._state = SessionState.OPEN
        return self

    def close(self) -> None:
        if self._state is SessionState.CLOSED:
            return
        try:
            self._transport.close()
        finally:
            self._state = SessionState.CLOSED

    def __enter__(self) -> "TransportSession":
        return self.open()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def write_bytes(self, data: bytes) -> int:
        if self._state is not SessionState.OPEN:
            raise SessionStateError("Printer session is not open")
        if not data:
            return 0
        drained = self._transport.drain_input(self._model.drain_timeout_ms)
        if drained:
            logger.debug("Discarded %d stale bytes from printer", drained)
        written = self._transport.write(data, self._model.write_timeout_ms)
        if written != len(data):
            raise ShortTransfer(len(data), written)
        return written

    def reset(self) -> int:
        return self.write_bytes(commands.reset_cmd())

    def set_text_scale(self, horizontal: int, vertical: int) -> int:
        return self.write_bytes(commands.text_scale_cmd(horizontal, vertical))

    def set_print_style(self, style: Union[PrintStyle, int]) -> int:
        return self.write_bytes(commands.print_style_cmd(style))

    def write_text(self, text: Union[str, bytes]) -> int:
        return self.write_bytes(commands.text_cmd(text))

    def feed_dots(self, dots: int) -> int:
        return self.write_bytes(commands.feed_dots_cmd(dots))

    def feed_lines(self, lines: int) -> int:
        return self.write_bytes(commands.feed_lines_cmd(lines))

    def set_horizontal_position(self, position: int) -> int:
        return self.write_bytes(commands.horizontal_position_cmd(position))

    def set_alignment(self, alignment: Alignment) -> int:
        return self.write_bytes(commands.alignment_cmd(alignment))

    def set_underline(self, thickness: int) -> int:
        return self.write_bytes(commands.underline_cmd(thickness))

    def print_bitmap(self, mode: BitmapMode, bitmap: Bitmap) -> int:
        """Send one header for the whole bitmap, then its rows in batches."""
        self._check_bitmap(bitmap)
        total = self.write_bytes(commands.bitmap_header_cmd(mode, bitmap.width, bitmap.height))
        for _, chunk in split_rows(bitmap, self._model.batch_lines):
            total += self.write_bytes(chunk)
        return total

    def print_bitmap_lines(
        self, mode: BitmapMode, bitmap: Bitmap, lines_per_batch: Optional[int] = None
    ) -> int:
        """Send the bitmap as self-contained raster commands of at most
        ``lines_per_batch`` rows each (default: the model's batch size).

        Unlike :meth:`print_bitmap`, every batch carries its own GS v 0
        header sized to that batch, so no transfer depends on rows from
        another batch.
        """
        self._check_bitmap(bitmap)
        lines = lines_per_batch or self._model.batch_lines
        total = 0
        for rows, chunk in split_rows(bitmap, lines):
            logger.debug("Sending %d bitmap rows", rows)
            total += self.write_bytes(commands.bitmap_header_cmd(mode, bitmap.width, rows))
            total += self.write_bytes(chunk)
        return total

    def _check_bitmap(self, bitmap: Bitmap) -> None:
        bitmap.validate()
        if bitmap.width % 8 != 0:
            raise ValueError("Bitmap width must be divisible by 8")
        if bitmap.width > self._model.dot_width:
            raise ValueError(
                f"Bitmap width {bitmap.width} exceeds printer width {self._model.dot_width}"
            )
