"""Image and text printing for EM5820-compatible ESC/POS thermal printers."""

from .errors import (
    DecodeFailure,
    DeviceNotFound,
    DeviceOpenFailure,
    PrinterError,
    SessionStateError,
    ShortTransfer,
    TransportError,
)
from .models import PrinterModel, PrinterModelRegistry
from .print_job import ImagePrintJob, PrintSettings, TextOptions, TextPrintJob

__version__ = "0.1.0"

__all__ = [
    "DecodeFailure",
    "DeviceNotFound",
    "DeviceOpenFailure",
    "ImagePrintJob",
    "PrinterError",
    "PrinterModel",
    "PrinterModelRegistry",
    "PrintSettings",
    "SessionStateError",
    "ShortTransfer",
    "TextOptions",
    "TextPrintJob",
    "TransportError",
]
