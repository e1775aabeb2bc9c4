from typing import List, Optional

import pytest
import usb.core
import usb.util

from em5820print.errors import DeviceNotFound, DeviceOpenFailure, SessionStateError, TransportError
from em5820print.transport import SessionState, TransportSession, UsbTransport


class FakeUsbDevice:
    def __init__(
        self,
        kernel_active: bool = False,
        detach_error: Optional[Exception] = None,
        kernel_error: Optional[Exception] = None,
        reads: Optional[List[object]] = None,
        write_result: object = None,
    ) -> None:
        self.kernel_active = kernel_active
        self.detach_error = detach_error
        self.kernel_error = kernel_error
        self.reads = list(reads or [])
        self.write_result = write_result
        self.detached: List[int] = []
        self.written: List[tuple] = []
        self.read_calls: List[tuple] = []

    def is_kernel_driver_active(self, interface: int) -> bool:
        if self.kernel_error is not None:
            raise self.kernel_error
        return self.kernel_active

    def detach_kernel_driver(self, interface: int) -> None:
        if self.detach_error is not None:
            raise self.detach_error
        self.detached.append(interface)

    def write(self, endpoint: int, data: bytes, timeout: int) -> int:
        self.written.append((endpoint, bytes(data), timeout))
        if isinstance(self.write_result, Exception):
            raise self.write_result
        if self.write_result is not None:
            return self.write_result
        return len(data)

    def read(self, endpoint: int, size: int, timeout: int):
        self.read_calls.append((endpoint, size, timeout))
        if not self.reads:
            raise usb.core.USBTimeoutError("Operation timed out")
        item = self.reads.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def usb_calls(monkeypatch):
    calls = {"find": [], "claim": [], "release": [], "dispose": [], "claim_error": None, "device": None}

    def find(**kwargs):
        calls["find"].append(kwargs)
        return calls["device"]

    def claim_interface(device, interface):
        calls["claim"].append(interface)
        if calls["claim_error"] is not None:
            raise calls["claim_error"]

    monkeypatch.setattr(usb.core, "find", find)
    monkeypatch.setattr(usb.util, "claim_interface", claim_interface)
    monkeypatch.setattr(usb.util, "release_interface", lambda device, interface: calls["release"].append(interface))
    monkeypatch.setattr(usb.util, "dispose_resources", lambda device: calls["dispose"].append(device))
    return calls


def test_open_finds_by_vendor_and_product(usb_calls, model) -> None:
    usb_calls["device"] = FakeUsbDevice()
    transport = UsbTransport(model)
    transport.open()
    assert usb_calls["find"] == [{"idVendor": 0x28E9, "idProduct": 0x0289}]
    assert usb_calls["claim"] == [0]
    assert transport.is_open


def test_missing_device_raises_not_found(usb_calls, model) -> None:
    transport = UsbTransport(model)
    with pytest.raises(DeviceNotFound):
        transport.open()
    assert not transport.is_open
    assert usb_calls["dispose"] == []


def test_missing_backend_is_open_failure(monkeypatch, model) -> None:
    def find(**kwargs):
        raise usb.core.NoBackendError("No backend available")

    monkeypatch.setattr(usb.core, "find", find)
    with pytest.raises(DeviceOpenFailure):
        UsbTransport(model).open()


def test_detaches_active_kernel_driver(usb_calls, model) -> None:
    device = FakeUsbDevice(kernel_active=True)
    usb_calls["device"] = device
    UsbTransport(model).open()
    assert device.detached == [0]


def test_detach_failure_releases_device(usb_calls, model) -> None:
    device = FakeUsbDevice(kernel_active=True, detach_error=usb.core.USBError("Access denied"))
    usb_calls["device"] = device
    transport = UsbTransport(model)
    with pytest.raises(DeviceOpenFailure, match="detach kernel driver"):
        transport.open()
    assert usb_calls["dispose"] == [device]
    assert usb_calls["release"] == []
    assert not transport.is_open


def test_claim_failure_releases_device(usb_calls, model) -> None:
    device = FakeUsbDevice()
    usb_calls["device"] = device
    usb_calls["claim_error"] = usb.core.USBError("Resource busy")
    transport = UsbTransport(model)
    with pytest.raises(DeviceOpenFailure, match="claim interface"):
        transport.open()
    assert usb_calls["dispose"] == [device]
    assert not transport.is_open


def test_kernel_driver_query_failure_releases_device(usb_calls, model) -> None:
    device = FakeUsbDevice(kernel_error=usb.core.USBError("Access denied"))
    usb_calls["device"] = device
    transport = UsbTransport(model)
    with pytest.raises(DeviceOpenFailure, match="query kernel driver"):
        transport.open()
    assert usb_calls["claim"] == []
    assert usb_calls["release"] == []
    assert usb_calls["dispose"] == [device]
    assert not transport.is_open


def test_kernel_driver_query_failure_leaves_session_closed(usb_calls, model) -> None:
    device = FakeUsbDevice(kernel_error=usb.core.USBError("Access denied"))
    usb_calls["device"] = device
    transport = UsbTransport(model)
    session = TransportSession(transport, model)
    with pytest.raises(DeviceOpenFailure):
        session.open()
    assert session.state is SessionState.CLOSED
    assert usb_calls["dispose"] == [device]
    assert not transport.is_open


def test_unexpected_error_during_open_releases_device(usb_calls, model) -> None:
    device = FakeUsbDevice(kernel_error=KeyboardInterrupt())
    usb_calls["device"] = device
    transport = UsbTransport(model)
    with pytest.raises(KeyboardInterrupt):
        transport.open()
    assert usb_calls["dispose"] == [device]
    assert not transport.is_open


def test_find_usb_error_is_open_failure(monkeypatch, model) -> None:
    def find(**kwargs):
        raise usb.core.USBError("Access denied")

    monkeypatch.setattr(usb.core, "find", find)
    transport = UsbTransport(model)
    with pytest.raises(DeviceOpenFailure, match="find USB device"):
        transport.open()
    assert not transport.is_open


def test_close_releases_interface_and_resources(usb_calls, model) -> None:
    device = FakeUsbDevice()
    usb_calls["device"] = device
    transport = UsbTransport(model)
    transport.open()
    transport.close()
    assert usb_calls["release"] == [0]
    assert usb_calls["dispose"] == [device]
    assert not transport.is_open
    transport.close()
    assert usb_calls["dispose"] == [device]


def test_write_targets_out_endpoint(usb_calls, model) -> None:
    device = FakeUsbDevice()
    usb_calls["device"] = device
    transport = UsbTransport(model)
    transport.open()
    assert transport.write(b"\x1b\x40", 5000) == 2
    assert device.written == [(0x03, b"\x1b\x40", 5000)]


def test_write_reports_partial_count(usb_calls, model) -> None:
    usb_calls["device"] = FakeUsbDevice(write_result=10)
    transport = UsbTransport(model)
    transport.open()
    assert transport.write(bytes(20), 5000) == 10


@pytest.mark.parametrize("error", [usb.core.USBError("Pipe error"), usb.core.USBTimeoutError("Operation timed out")])
def test_write_error_is_transport_error(usb_calls, model, error) -> None:
    usb_calls["device"] = FakeUsbDevice(write_result=error)
    transport = UsbTransport(model)
    transport.open()
    with pytest.raises(TransportError):
        transport.write(b"abc", 5000)


def test_drain_reads_until_timeout(usb_calls, model) -> None:
    device = FakeUsbDevice(reads=[b"\x12\x34", b"\x56"])
    usb_calls["device"] = device
    transport = UsbTransport(model)
    transport.open()
    assert transport.drain_input(100) == 3
    assert device.read_calls[0] == (0x81, 64, 100)
    assert len(device.read_calls) == 3


def test_drain_stops_on_empty_read(usb_calls, model) -> None:
    device = FakeUsbDevice(reads=[b"\x01", b"", b"\x02"])
    usb_calls["device"] = device
    transport = UsbTransport(model)
    transport.open()
    assert transport.drain_input(100) == 1


def test_drain_stops_on_usb_error(usb_calls, model) -> None:
    usb_calls["device"] = FakeUsbDevice(reads=[b"\x01", usb.core.USBError("Pipe error")])
    transport = UsbTransport(model)
    transport.open()
    assert transport.drain_input(100) == 1


def test_io_requires_open_device(model) -> None:
    transport = UsbTransport(model)
    with pytest.raises(SessionStateError):
        transport.write(b"x", 5000)
    with pytest.raises(SessionStateError):
        transport.drain_input(100)
