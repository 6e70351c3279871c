"""Error types raised while resolving options and running optimizations."""

from __future__ import annotations

import typing as t
from typing import Literal, Self

SizeSide = Literal["before", "after"]


class PdfOptimizeError(RuntimeError):
    """Base class for all errors reported by ``pdfoptimize``."""

    exit_code: t.ClassVar[int] = 1


class InvalidArgumentError(PdfOptimizeError):
    """Raised when command line input is malformed or conflicting."""

    exit_code = 2

    @classmethod
    def argument_count(cls) -> Self:
        return cls("requires 1 or 2 arguments")

    @classmethod
    def output_with_inplace(cls) -> Self:
        return cls("output argument not allowed with --inplace flag")

    @classmethod
    def invalid_style(cls, choices: t.Iterable[str]) -> Self:
        joined = ", ".join(choices)
        return cls(f"style must be one of: {joined}")

    @classmethod
    def conflicting_flags(cls, flags: t.Sequence[str]) -> Self:
        if len(flags) == 2:  # noqa: PLR2004
            joined = f"{flags[0]} and {flags[1]}"
        else:
            joined = ", ".join(flags[:-1]) + f" and {flags[-1]}"
        return cls(f"flags {joined} are mutually exclusive")

    @classmethod
    def unrecognized_arguments(cls, extra: t.Sequence[str]) -> Self:
        joined = " ".join(extra)
        return cls(f"unrecognized arguments: {joined}")

    @classmethod
    def invalid_path(cls, path: str) -> Self:
        return cls(f"invalid path: {path!r}")


class SizeReadError(PdfOptimizeError):
    """Raised when a file size cannot be read before or after optimizing."""

    def __init__(self, message: str, *, side: SizeSide, path: str) -> None:
        """Record which side of the comparison failed."""
        super().__init__(message)
        self.side = side
        self.path = path

    @classmethod
    def before(cls, path: str, exc: OSError) -> Self:
        return cls(f"Error reading original file size: {exc}", side="before", path=path)

    @classmethod
    def after(cls, path: str, exc: OSError) -> Self:
        return cls(f"Error reading new file size: {exc}", side="after", path=path)


class OptimizationError(PdfOptimizeError):
    """Raised when the optimization engine reports a failure."""

    def __init__(self, message: str, *, engine: str | None = None) -> None:
        """Keep the engine message verbatim alongside the engine name."""
        super().__init__(message)
        self.engine = engine
        self.detail = message

    @classmethod
    def engine_failed(cls, engine: str, detail: str) -> Self:
        return cls(f"Error optimizing PDF: {detail}", engine=engine)

    @classmethod
    def engine_unavailable(cls, engine: str) -> Self:
        return cls(
            f"Error optimizing PDF: engine {engine!r} is not available",
            engine=engine,
        )

    @classmethod
    def invalid_dpi(cls, dpi: int) -> Self:
        return cls(f"image DPI must be a positive integer, got {dpi}")


__all__ = [
    "InvalidArgumentError",
    "OptimizationError",
    "PdfOptimizeError",
    "SizeReadError",
    "SizeSide",
]
