"""Run one optimization: measure, call the engine, measure again, report."""

from __future__ import annotations

import sys
import time
import typing as t

from pdf_optimize.engines import EngineFactory, select
from pdf_optimize.report import SizeReport, SizeSample, capture_size
from pdf_optimize.request import InvocationRequest
from pdf_optimize.utils import logger


def _write_line(stream: t.TextIO, message: str) -> None:
    stream.write(f"{message}\n")
    stream.flush()


def optimize(
    request: InvocationRequest,
    *,
    engine_factory: EngineFactory | None = None,
    out: t.TextIO | None = None,
) -> SizeReport | None:
    """Execute ``request`` and return the size report.

    Every step runs at most once and the first failure propagates.  When the
    request is silent nothing is printed, no sizes are read and ``None`` is
    returned.

    Args:
        request: Validated execution plan.
        engine_factory: Callable creating the engine for the input path.
            Defaults to the engine selected by ``request.engine``.
        out: Stream for the announcement and report; defaults to stdout.

    Raises:
        SizeReadError: The input or output size could not be read.
        OptimizationError: The engine failed.
    """
    stream = out if out is not None else sys.stdout
    factory = engine_factory if engine_factory is not None else select(request.engine)

    before: SizeSample | None = None
    if not request.silent:
        _write_line(
            stream,
            f"Optimizing {request.input_path} to {request.output_path} "
            f"for {request.profile}...",
        )
        before = capture_size(request.input_path, "before")

    engine = factory(request.input_path).use_profile(request.profile)
    if request.dpi_override is not None:
        engine.image_dpi(request.dpi_override)

    started = time.perf_counter()
    if request.in_place:
        engine.optimize_inplace()
    else:
        engine.optimize(request.output_path)
    logger.info("optimization finished in %.2fs", time.perf_counter() - started)

    if before is None:
        return None
    after = capture_size(request.output_path, "after")
    report = SizeReport(before=before, after=after)
    for line in report.lines():
        _write_line(stream, line)
    return report


__all__ = ["optimize"]
