from .base import ByteTransport
from .serial import SerialTransport
from .session import SessionState, TransportSession
from .usb import UsbTransport

__all__ = ["ByteTransport", "SerialTransport", "SessionState", "TransportSession", "UsbTransport"]
