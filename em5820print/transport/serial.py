from __future__ import annotations

import errno
from typing import Any, Optional

from ..errors import DeviceNotFound, DeviceOpenFailure, SessionStateError, TransportError
from ..models import PrinterModel, default_model


def _import_serial():
    try:
        import serial
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("pyserial is required. Install with: pip install pyserial") from exc
    return serial


class SerialTransport:
    """Transport for printers exposed as a tty (e.g. /dev/ttyUSB0, /dev/rfcomm0)."""

    def __init__(self, port: str, model: Optional[PrinterModel] = None) -> None:
        self._port_name = port
        self._model = model or default_model()
        self._port: Any = None

    @property
    def is_open(self) -> bool:
        return self._port is not None

    def open(self) -> None:
        if self._port is not None:
            return
        serial = _import_serial()
        try:
            self._port = serial.Serial(
                self._port_name,
                self._model.baud_rate,
                timeout=self._model.drain_timeout_ms / 1000.0,
                write_timeout=self._model.write_timeout_ms / 1000.0,
            )
        except serial.SerialException as exc:
            if getattr(exc, "errno", None) == errno.ENOENT:
                raise DeviceNotFound(f"Serial device not found: {self._port_name}") from exc
            raise DeviceOpenFailure(f"Serial connection failed: {exc}") from exc

    def close(self) -> None:
        port, self._port = self._port, None
        if port is not None:
            port.close()

    def write(self, data: bytes, timeout_ms: int) -> int:
        port = self._require_port()
        serial = _import_serial()
        port.write_timeout = max(0.0, timeout_ms / 1000.0)
        try:
            written = port.write(data)
            port.flush()
        except serial.SerialTimeoutException as exc:
            raise TransportError(f"Failed transfer data: timed out after {timeout_ms} ms") from exc
        except serial.SerialException as exc:
            raise TransportError(f"Failed transfer data: {exc}") from exc
        return int(written or 0)

    def drain_input(self, timeout_ms: int) -> int:
        port = self._require_port()
        port.timeout = max(0.0, timeout_ms / 1000.0)
        drained = 0
        while True:
            chunk = port.read(self._model.drain_chunk_size)
            if not chunk:
                break
            drained += len(chunk)
        return drained

    def _require_port(self) -> Any:
        if self._port is None:
            raise SessionStateError(f"Serial port {self._port_name} is not open")
        return self._port
