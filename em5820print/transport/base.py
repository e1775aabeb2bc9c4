from __future__ import annotations

from typing import Protocol


class ByteTransport(Protocol):
    """Local byte pipe to the printer, as seen by :class:`TransportSession`."""

    def open(self) -> None:
        ...

    def close(self) -> None:
        ...

    def write(self, data: bytes, timeout_ms: int) -> int:
        """Send ``data`` and return how many bytes the device accepted."""
        ...

    def drain_input(self, timeout_ms: int) -> int:
        """Discard pending inbound bytes and return how many were dropped."""
        ...
