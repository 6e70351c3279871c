"""Optimization engine that drives the Ghostscript ``pdfwrite`` device."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import ClassVar

from pdf_optimize.config import get_ghostscript_path
from pdf_optimize.engines.base import PdfOptimizer
from pdf_optimize.engines.registry import register
from pdf_optimize.errors import OptimizationError
from pdf_optimize.profiles import Profile
from pdf_optimize.utils import logger

EXECUTABLE_NAMES = ("gs", "gswin64c", "gswin32c")

PDFSETTINGS: dict[Profile, str] = {
    Profile.SCREEN: "/screen",
    Profile.EBOOK: "/ebook",
    Profile.PRINT: "/printer",
    Profile.PREPRESS: "/prepress",
}


def find_ghostscript(configured: str | None = None) -> str | None:
    """Return the Ghostscript executable to use, or ``None`` when missing."""
    if configured:
        if Path(configured).is_file():
            return configured
        return shutil.which(configured)
    for name in EXECUTABLE_NAMES:
        found = shutil.which(name)
        if found:
            return found
    return None


@register
class GhostscriptOptimizer(PdfOptimizer):
    """Run ``gs -sDEVICE=pdfwrite`` with the preset's ``PDFSETTINGS``."""

    name: ClassVar[str] = "ghostscript"

    def __init__(self, input_path: str, executable: str | None = None) -> None:
        """Bind to ``input_path``; ``executable`` defaults to the configured one."""
        super().__init__(input_path)
        if executable is None:
            executable = find_ghostscript(get_ghostscript_path())
        self.executable = executable

    @classmethod
    def is_available(cls) -> bool:
        return find_ghostscript(get_ghostscript_path()) is not None

    def build_command(self, target: Path) -> list[str]:
        """Return the Ghostscript command line writing to ``target``."""
        if self.executable is None:
            raise OptimizationError.engine_unavailable(self.name)
        cmd = [
            self.executable,
            "-sDEVICE=pdfwrite",
            "-dCompatibilityLevel=1.4",
            f"-dPDFSETTINGS={PDFSETTINGS[self.profile]}",
            "-dNOPAUSE",
            "-dQUIET",
            "-dBATCH",
            "-dSAFER",
        ]
        if self.dpi is not None:
            for kind in ("Color", "Gray", "Mono"):
                cmd.extend(
                    [
                        f"-dDownsample{kind}Images=true",
                        f"-d{kind}ImageResolution={self.dpi}",
                    ]
                )
        cmd.extend([f"-sOutputFile={target}", self.input_path])
        return cmd

    def _write(self, target: Path) -> None:
        cmd = self.build_command(target)
        logger.debug("Running %s", " ".join(cmd))
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)  # noqa: S603
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or exc.stdout or "").strip()
            if not detail:
                detail = f"ghostscript exited with status {exc.returncode}"
            raise OptimizationError.engine_failed(self.name, detail) from exc


__all__ = ["EXECUTABLE_NAMES", "PDFSETTINGS", "GhostscriptOptimizer", "find_ghostscript"]
