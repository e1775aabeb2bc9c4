from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import IO, Iterator, List, NoReturn, Optional

from ..models import PrinterModel, PrinterModelRegistry
from ..print_job import DEFAULT_TEXT_FEED_LINES, ImagePrintJob, TextOptions, TextPrintJob
from ..protocol.types import Alignment
from ..rendering.converters import SUPPORTED_EXTENSIONS
from ..transport.base import ByteTransport
from ..transport.serial import SerialTransport
from ..transport.session import TransportSession
from ..transport.usb import UsbTransport

logger = logging.getLogger(__name__)

SERIAL_ENV_VAR = "EM5820_SERIAL"
TEXT_EXAMPLES = """examples:
  echo 'Hello World' | %(prog)s
  cat file.txt | %(prog)s --center --bold
  ls -la | %(prog)s --left
  date | %(prog)s --bold --center
"""


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _feed_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid line count: {value!r}") from None
    if not 0 <= count <= 255:
        raise argparse.ArgumentTypeError(f"line count must be between 0 and 255, got {count}")
    return count


def _add_device_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--serial",
        metavar="PATH",
        default=os.environ.get(SERIAL_ENV_VAR),
        help=f"Serial port path instead of USB (default: ${SERIAL_ENV_VAR})",
    )
    parser.add_argument("--model", help="Printer model number (default: EM5820)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log transfer details")


def image_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(description="Print an image on an EM5820 thermal printer.")
    parser.add_argument(
        "image",
        nargs="?",
        help="Image file (" + ", ".join(sorted(SUPPORTED_EXTENSIONS)) + ")",
    )
    _add_device_args(parser)
    return parser


def text_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        description="Read text from stdin and print to thermal printer.",
        epilog=TEXT_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-b", "--bold", action="store_true", help="Print in bold")
    parser.add_argument("-u", "--underline", action="store_true", help="Print with underline")
    align_group = parser.add_mutually_exclusive_group()
    align_group.add_argument(
        "-l", "--left", dest="alignment", action="store_const", const=Alignment.LEFT,
        help="Left align (default)",
    )
    align_group.add_argument(
        "-c", "--center", dest="alignment", action="store_const", const=Alignment.CENTER,
        help="Center align",
    )
    align_group.add_argument(
        "-r", "--right", dest="alignment", action="store_const", const=Alignment.RIGHT,
        help="Right align",
    )
    parser.add_argument("-w", "--wide", action="store_true", help="Double width text")
    parser.add_argument("-t", "--tall", action="store_true", help="Double height text")
    parser.add_argument("-L", "--large", action="store_true", help="Double width and height")
    parser.add_argument(
        "-f", "--feed", metavar="N", type=_feed_count, default=DEFAULT_TEXT_FEED_LINES,
        help=f"Feed N lines after printing (default: {DEFAULT_TEXT_FEED_LINES})",
    )
    parser.set_defaults(alignment=Alignment.LEFT)
    _add_device_args(parser)
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")


def open_transport(args: argparse.Namespace, model: PrinterModel) -> ByteTransport:
    if args.serial:
        return SerialTransport(args.serial, model)
    return UsbTransport(model)


def text_options(args: argparse.Namespace) -> TextOptions:
    return TextOptions(
        bold=args.bold,
        underline=args.underline,
        double_width=args.wide or args.large,
        double_height=args.tall or args.large,
        alignment=args.alignment,
        feed_lines=args.feed,
    )


def read_lines(stream: IO[bytes]) -> Iterator[bytes]:
    """Yield lines from ``stream`` without their trailing newline."""
    for line in stream:
        if line.endswith(b"\n"):
            line = line[:-1]
        yield line


def print_image(args: argparse.Namespace) -> int:
    model = PrinterModelRegistry.load().require(args.model)
    job = ImagePrintJob(model)
    logger.info("Loading and processing image: %s", args.image)
    bitmap = job.render(args.image)
    logger.info("Connecting to printer...")
    with TransportSession(open_transport(args, model), model) as session:
        total = job.run(session, bitmap)
    logger.info("Done! (%d bytes sent)", total)
    return 0


def print_text(args: argparse.Namespace, stream: IO[bytes]) -> int:
    model = PrinterModelRegistry.load().require(args.model)
    job = TextPrintJob(text_options(args))
    with TransportSession(open_transport(args, model), model) as session:
        total = job.run(session, read_lines(stream))
    logger.debug("Sent %d bytes", total)
    return 0


def image_main(argv: Optional[List[str]] = None) -> int:
    parser = image_parser()
    args = parser.parse_args(argv)
    if not args.image:
        parser.print_usage(sys.stderr)
        print("Supported formats: " + ", ".join(sorted(SUPPORTED_EXTENSIONS)), file=sys.stderr)
        return 1
    _configure_logging(args.verbose)
    try:
        return print_image(args)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def text_main(argv: Optional[List[str]] = None, stream: Optional[IO[bytes]] = None) -> int:
    args = text_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return print_text(args, stream if stream is not None else sys.stdin.buffer)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(image_main())
