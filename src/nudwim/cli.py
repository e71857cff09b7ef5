from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import BinaryIO, TextIO

from nudwim.cmdline.bytes import ByteBuffer
from nudwim.config import Settings
from nudwim.constants import EXIT_FAILURE, EXIT_OK
from nudwim.errors import DwimError
from nudwim.interpolate import dwim_interpolate, dwim_interpolate_graphemes
from nudwim.logs import configure_logging
from nudwim.reporting.console import print_exception, use_diagnostics
from nudwim.wire import decode_request, encode_response

__all__ = ["build_parser", "run_test_string", "run_wire", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nudwim",
        description=(
            "Turn the string literal under the cursor into an interpolated string. "
            "Reads a MessagePack [cursor, text] pair on stdin and writes one to stdout."
        ),
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="more logging (repeatable)"
    )
    parser.add_argument(
        "-q", "--quiet", action="count", default=0, help="less logging (repeatable)"
    )
    parser.add_argument(
        "--test-string",
        metavar="MARKED",
        help="rewrite a command line given inline, with '|' marking the cursor, and print the result",
    )
    return parser


def run_test_string(marked: str, out: TextIO, marker: str) -> None:
    buf = ByteBuffer.from_marked(marked, marker)
    result = dwim_interpolate(buf)
    print(result.to_marked(marker), file=out)


def run_wire(stdin: BinaryIO, stdout: BinaryIO) -> None:
    request = decode_request(stdin.read())
    logger.debug("request %r", request)
    result = dwim_interpolate_graphemes(request)
    stdout.write(encode_response(result))
    stdout.flush()


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        parser.error(str(e))

    with use_diagnostics(settings.color) as console:
        configure_logging(settings.verbosity + args.verbose - args.quiet, console)
        try:
            if args.test_string is not None:
                try:
                    run_test_string(args.test_string, sys.stdout, settings.marker)
                except DwimError:
                    logger.error("Error running against %r", args.test_string)
                    raise
            else:
                run_wire(stdin or sys.stdin.buffer, stdout or sys.stdout.buffer)
        except DwimError as e:
            print_exception(e)
            return EXIT_FAILURE
        except ValueError as e:  # WireError, or a marked string with no cursor
            logger.error("%s", e)
            return EXIT_FAILURE
    return EXIT_OK
