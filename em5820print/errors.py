from __future__ import annotations


class PrinterError(RuntimeError):
    """Base class for everything that aborts a print job."""


class DecodeFailure(PrinterError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to load image: {path} ({reason})")
        self.path = path
        self.reason = reason


class DeviceNotFound(PrinterError):
    pass


class DeviceOpenFailure(PrinterError):
    pass


class TransportError(PrinterError):
    pass


class ShortTransfer(TransportError):
    """The transport accepted fewer bytes than requested."""

    def __init__(self, requested: int, transferred: int) -> None:
        super().__init__(f"Failed transfer data: sent {transferred} of {requested} bytes")
        self.requested = requested
        self.transferred = transferred


class SessionStateError(PrinterError):
    pass
