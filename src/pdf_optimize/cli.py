"""Command line interface of ``pdfoptimize``."""

from __future__ import annotations

import argparse
import sys
import typing as t

from pdf_optimize import __version__
from pdf_optimize.config import ENGINE_CHOICES, load_config, normalise_engine
from pdf_optimize.engines import EngineFactory
from pdf_optimize.errors import InvalidArgumentError, PdfOptimizeError
from pdf_optimize.orchestrator import optimize
from pdf_optimize.profiles import PROFILE_NAMES
from pdf_optimize.request import InvocationRequest
from pdf_optimize.utils import configure_logging, logger

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def main(
    argv: t.Sequence[str] | None = None,
    *,
    engine_factory: EngineFactory | None = None,
) -> int:
    """Parse *argv*, run the optimization and return the exit status."""
    parser = _create_parser()
    try:
        args, extra = parser.parse_known_intermixed_args(argv)
    except SystemExit as exc:  # pragma: no cover - argparse handles usage exits
        code = exc.code
        return code if isinstance(code, int) else 1

    cfg = load_config()
    configure_logging(args.log_level or str(cfg.get("log_level") or "WARNING"))

    try:
        if extra:
            raise InvalidArgumentError.unrecognized_arguments(extra)
        request = InvocationRequest.from_cli(
            args.paths,
            style=args.style,
            screen=args.screen,
            ebook=args.ebook,
            print_=args.print_,
            prepress=args.prepress,
            in_place=args.inplace,
            silent=args.silent,
            dpi=args.dpi,
            engine=args.engine or normalise_engine(cfg.get("engine")),
        )
        logger.debug("resolved %s", request)
        optimize(request, engine_factory=engine_factory)
    except PdfOptimizeError as exc:
        _write_line(sys.stderr, str(exc))
        return exc.exit_code
    return 0


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfoptimize",
        usage="%(prog)s [options] input [output]",
        description="Optimize PDF files for screen, ebook, print or prepress use.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="input [output]",
        help="PDF to optimize and, optionally, where to write the result.",
    )
    parser.add_argument(
        "-i",
        "--inplace",
        action="store_true",
        help="optimize file in-place",
    )
    parser.add_argument(
        "-q",
        "--silent",
        action="store_true",
        help="no output",
    )
    parser.add_argument(
        "--style",
        metavar="NAME",
        help=f"optimization style ({', '.join(PROFILE_NAMES)})",
    )
    parser.add_argument(
        "-p",
        "--print",
        dest="print_",
        action="store_true",
        help="optimize for print",
    )
    parser.add_argument("-e", "--ebook", action="store_true", help="optimize for ebook")
    parser.add_argument("-s", "--screen", action="store_true", help="optimize for screen")
    parser.add_argument("--prepress", action="store_true", help="optimize for prepress")
    parser.add_argument(
        "--dpi",
        type=int,
        default=0,
        help="image DPI (0 = auto)",
    )
    parser.add_argument(
        "--engine",
        choices=ENGINE_CHOICES,
        help="optimization engine (default: from config, else auto)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        help="diagnostic log level",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _write_line(stream: t.TextIO, message: str) -> None:
    stream.write(f"{message}\n")
    stream.flush()


__all__ = ["main"]
