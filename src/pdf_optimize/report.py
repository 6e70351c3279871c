"""File size sampling and the before/after size report."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pdf_optimize.errors import SizeReadError, SizeSide

_UNIT = 1024
_UNIT_PREFIXES = "KMGTPE"


@dataclass(frozen=True, slots=True)
class SizeSample:
    """Size of ``path`` in bytes at one point in time."""

    path: str
    bytes: int


@dataclass(frozen=True, slots=True)
class SizeReport:
    """Before and after samples of one optimization run."""

    before: SizeSample
    after: SizeSample

    @property
    def change_percent(self) -> float:
        return change_percent(self.before.bytes, self.after.bytes)

    def lines(self) -> list[str]:
        return [
            f"Original size: {format_bytes(self.before.bytes)}",
            f"New size: {format_bytes(self.after.bytes)}",
            f"Change: {format_change(self.change_percent)}",
        ]


def capture_size(path: str, side: SizeSide) -> SizeSample:
    """Stat ``path`` and return its size.

    Raises:
        SizeReadError: the file cannot be stat'ed; ``side`` tells whether the
            original or the optimized file was being measured.
    """
    try:
        size = Path(path).stat().st_size
    except OSError as exc:
        if side == "before":
            raise SizeReadError.before(path, exc) from exc
        raise SizeReadError.after(path, exc) from exc
    return SizeSample(path=path, bytes=size)


def format_bytes(size: int) -> str:
    """Format ``size`` using binary units, e.g. ``1536`` -> ``"1.5 KB"``."""
    if size < _UNIT:
        return f"{size} B"
    div, exp = _UNIT, 0
    n = size // _UNIT
    while n >= _UNIT and exp < len(_UNIT_PREFIXES) - 1:
        div *= _UNIT
        exp += 1
        n //= _UNIT
    return f"{size / div:.1f} {_UNIT_PREFIXES[exp]}B"


def change_percent(before: int, after: int) -> float:
    """Return the size reduction in percent; negative when the file grew.

    An empty original has no meaningful ratio, so the change is reported as
    ``0.0``.
    """
    if before == 0:
        return 0.0
    return (before - after) / before * 100


def format_change(percent: float) -> str:
    label = "smaller" if percent >= 0 else "LARGER"
    return f"{abs(percent):.0f}% {label}"


__all__ = [
    "SizeReport",
    "SizeSample",
    "capture_size",
    "change_percent",
    "format_bytes",
    "format_change",
]
