from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import pytest

from em5820print.models import PrinterModel
from em5820print.transport.session import TransportSession


class FakeTransport:
    """In-memory ByteTransport that records every call in order."""

    def __init__(
        self,
        accept: Optional[int] = None,
        stale: Optional[List[int]] = None,
        open_error: Optional[Exception] = None,
        close_error: Optional[Exception] = None,
    ) -> None:
        self.accept = accept
        self.stale = list(stale or [])
        self.open_error = open_error
        self.close_error = close_error
        self.events: List[Tuple[str, object]] = []
        self.writes: List[bytes] = []
        self.write_timeouts: List[int] = []
        self.drain_timeouts: List[int] = []

    def open(self) -> None:
        self.events.append(("open", None))
        if self.open_error is not None:
            raise self.open_error

    def close(self) -> None:
        self.events.append(("close", None))
        if self.close_error is not None:
            raise self.close_error

    def write(self, data: bytes, timeout_ms: int) -> int:
        self.events.append(("write", bytes(data)))
        self.writes.append(bytes(data))
        self.write_timeouts.append(timeout_ms)
        if self.accept is not None:
            return self.accept
        return len(data)

    def drain_input(self, timeout_ms: int) -> int:
        self.events.append(("drain", timeout_ms))
        self.drain_timeouts.append(timeout_ms)
        return self.stale.pop(0) if self.stale else 0

    @property
    def sent(self) -> bytes:
        return b"".join(self.writes)


@pytest.fixture
def model() -> PrinterModel:
    return PrinterModel(model_no="TEST", vendor_id=0x28E9, product_id=0x0289)


@pytest.fixture
def make_transport() -> Callable[..., FakeTransport]:
    return FakeTransport


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def session(transport: FakeTransport, model: PrinterModel):
    sess = TransportSession(transport, model)
    sess.open()
    yield sess
    sess.close()
