from __future__ import annotations

import logging
from typing import Any, Optional

import usb.core
import usb.util

from ..errors import DeviceNotFound, DeviceOpenFailure, SessionStateError, TransportError
from ..models import PrinterModel, default_model

logger = logging.getLogger(__name__)


class UsbTransport:
    """Bulk-endpoint transport for a USB printer located by vendor/product id.

    ``open`` either leaves the device claimed or releases everything it
    acquired before raising.
    """

    def __init__(self, model: Optional[PrinterModel] = None) -> None:
        self._model = model or default_model()
        self._device: Any = None
        self._claimed = False

    @property
    def is_open(self) -> bool:
        return self._device is not None

    def open(self) -> None:
        if self._device is not None:
            return
        model = self._model
        try:
            device = usb.core.find(idVendor=model.vendor_id, idProduct=model.product_id)
        except usb.core.NoBackendError as exc:
            raise DeviceOpenFailure(f"Failed to initialize libusb: {exc}") from exc
        except usb.core.USBError as exc:
            raise DeviceOpenFailure(f"Failed to find USB device: {exc}") from exc
        if device is None:
            raise DeviceNotFound(
                f"Target USB device not found ({model.vendor_id:04x}:{model.product_id:04x})"
            )
        self._device = device
        try:
            self._detach_kernel_driver(device)
            self._claim_interface(device)
        except BaseException:
            self._release()
            raise
        logger.debug("Opened USB printer %04x:%04x", model.vendor_id, model.product_id)

    def close(self) -> None:
        try:
            self._release()
        except usb.core.USBError as exc:
            raise TransportError(f"Failed to release USB device: {exc}") from exc

    def write(self, data: bytes, timeout_ms: int) -> int:
        device = self._require_device()
        try:
            return int(device.write(self._model.endpoint_out, data, timeout_ms))
        except usb.core.USBTimeoutError as exc:
            raise TransportError(f"Failed transfer data: timed out after {timeout_ms} ms") from exc
        except usb.core.USBError as exc:
            raise TransportError(f"Failed transfer data: {exc}") from exc

    def drain_input(self, timeout_ms: int) -> int:
        device = self._require_device()
        drained = 0
        while True:
            try:
                chunk = device.read(self._model.endpoint_in, self._model.drain_chunk_size, timeout_ms)
            except usb.core.USBTimeoutError:
                break
            except usb.core.USBError as exc:
                logger.debug("Stopped draining input: %s", exc)
                break
            if not chunk:
                break
            drained += len(chunk)
        return drained

    def _detach_kernel_driver(self, device: Any) -> None:
        interface = self._model.interface
        try:
            active = device.is_kernel_driver_active(interface)
        except NotImplementedError:
            return
        except usb.core.USBError as exc:
            raise DeviceOpenFailure(f"Failed to query kernel driver: {exc}") from exc
        if not active:
            return
        try:
            device.detach_kernel_driver(interface)
        except usb.core.USBError as exc:
            raise DeviceOpenFailure(f"Failed to detach kernel driver: {exc}") from exc

    def _claim_interface(self, device: Any) -> None:
        try:
            usb.util.claim_interface(device, self._model.interface)
        except usb.core.USBError as exc:
            raise DeviceOpenFailure(f"Failed to claim interface: {exc}") from exc
        self._claimed = True

    def _release(self) -> None:
        device, self._device = self._device, None
        if device is None:
            return
        try:
            if self._claimed:
                usb.util.release_interface(device, self._model.interface)
        finally:
            self._claimed = False
            usb.util.dispose_resources(device)

    def _require_device(self) -> Any:
        if self._device is None:
            raise SessionStateError("USB device is not open")
        return self._device
