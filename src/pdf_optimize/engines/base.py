"""Abstract base class for PDF optimization engines."""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import suppress
from pathlib import Path
from typing import ClassVar, Self

from pdf_optimize.errors import OptimizationError
from pdf_optimize.profiles import DEFAULT_PROFILE, Profile
from pdf_optimize.utils import logger

ERR_INPUT_MISSING = "input file not found: {path}"
ERR_EMPTY_OUTPUT = "engine produced an empty file"


class PdfOptimizer(ABC):
    """Define the optimization engine interface.

    An engine is bound to one input document.  Callers pick a preset through
    one of the ``for_*`` methods, optionally override the image resolution
    with :meth:`image_dpi` and then run :meth:`optimize` or
    :meth:`optimize_inplace`.  Both run methods raise
    :class:`~pdf_optimize.errors.OptimizationError` on failure.

    Subclasses only implement :meth:`_write`, which renders the optimized
    document to a scratch file.  The scratch file is created next to the
    destination and moved over it once the engine succeeded, so a failed run
    never leaves a partial or truncated destination behind.
    """

    #: Canonical engine name used for registry lookups.
    name: ClassVar[str] = ""

    def __init__(self, input_path: str) -> None:
        """Bind the engine to ``input_path`` with the default preset."""
        self.input_path = input_path
        self.profile: Profile = DEFAULT_PROFILE
        self.dpi: int | None = None

    @classmethod
    def is_available(cls) -> bool:
        """Return ``True`` when the engine can run on this machine."""
        return True

    def for_screen(self) -> Self:
        self.profile = Profile.SCREEN
        return self

    def for_ebook(self) -> Self:
        self.profile = Profile.EBOOK
        return self

    def for_print(self) -> Self:
        self.profile = Profile.PRINT
        return self

    def for_prepress(self) -> Self:
        self.profile = Profile.PREPRESS
        return self

    def use_profile(self, profile: Profile) -> Self:
        """Select ``profile`` through the matching ``for_*`` method."""
        selectors: dict[Profile, Callable[[], Self]] = {
            Profile.SCREEN: self.for_screen,
            Profile.EBOOK: self.for_ebook,
            Profile.PRINT: self.for_print,
            Profile.PREPRESS: self.for_prepress,
        }
        return selectors[profile]()

    def image_dpi(self, dpi: int) -> Self:
        """Override the preset's image resolution with ``dpi``."""
        if dpi <= 0:
            raise OptimizationError.invalid_dpi(dpi)
        self.dpi = dpi
        return self

    def optimize(self, output_path: str) -> None:
        """Write the optimized document to ``output_path``."""
        self._run(Path(output_path))

    def optimize_inplace(self) -> None:
        """Replace the input document with its optimized version."""
        self._run(Path(self.input_path))

    @abstractmethod
    def _write(self, target: Path) -> None:
        """Render the optimized input document to ``target``.

        Raises:
            OptimizationError: The backend failed.
        """

    def _run(self, destination: Path) -> None:
        source = Path(self.input_path)
        if not source.is_file():
            raise OptimizationError.engine_failed(
                self.name, ERR_INPUT_MISSING.format(path=self.input_path)
            )
        logger.info(
            "%s: optimizing %s -> %s (profile=%s, dpi=%s)",
            self.name,
            source,
            destination,
            self.profile,
            self.dpi or "auto",
        )
        try:
            fd, scratch_name = tempfile.mkstemp(
                prefix=f".{destination.stem}-", suffix=".pdf", dir=destination.parent
            )
        except OSError as exc:
            raise OptimizationError.engine_failed(self.name, str(exc)) from exc
        os.close(fd)
        scratch = Path(scratch_name)
        try:
            self._write(scratch)
            if scratch.stat().st_size == 0:
                raise OptimizationError.engine_failed(self.name, ERR_EMPTY_OUTPUT)
            os.replace(scratch, destination)
        except OSError as exc:
            raise OptimizationError.engine_failed(self.name, str(exc)) from exc
        finally:
            with suppress(FileNotFoundError):
                scratch.unlink()


EngineFactory = Callable[[str], PdfOptimizer]


__all__ = ["EngineFactory", "PdfOptimizer"]
