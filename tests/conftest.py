from __future__ import annotations

from pathlib import Path
from typing import ClassVar

import fitz
import pytest
from PIL import Image

from pdf_optimize import utils
from pdf_optimize.engines.base import PdfOptimizer
from pdf_optimize.errors import OptimizationError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config file at an empty per-test location."""
    config = tmp_path_factory.mktemp("config") / "pdf_optimize_config.json"
    monkeypatch.setattr(utils, "CONFIG_FILE", config)
    return config


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    document = fitz.open()
    try:
        for page_index in range(3):
            page = document.new_page(width=200, height=200)
            page.insert_text((72, 72), f"Page {page_index + 1}")
        document.save(pdf_path)
    finally:
        document.close()
    return pdf_path


@pytest.fixture()
def pdf_with_image(tmp_path: Path) -> Path:
    """PDF showing an 800x800 noise image in a 100pt square (576 dpi)."""
    pdf_path = tmp_path / "with_image.pdf"
    img_path = tmp_path / "noise.png"
    Image.effect_noise((800, 800), 64).convert("RGB").save(img_path)
    doc = fitz.open()
    try:
        page = doc.new_page(width=200, height=200)
        page.insert_text((72, 150), "Hi")
        page.insert_image(fitz.Rect(0, 0, 100, 100), filename=str(img_path))
        doc.save(pdf_path)
    finally:
        doc.close()
    return pdf_path


class FakeOptimizer(PdfOptimizer):
    """Engine double that records calls and writes fixed bytes."""

    name: ClassVar[str] = "fake"
    instances: ClassVar[list[FakeOptimizer]] = []
    output_bytes: ClassVar[bytes | None] = b"%PDF-1.4 optimized"
    failure: ClassVar[str | None] = None

    def __init__(self, input_path: str) -> None:
        super().__init__(input_path)
        self.calls: list[tuple[str, str | None]] = []
        type(self).instances.append(self)

    def optimize(self, output_path: str) -> None:
        self.calls.append(("optimize", output_path))
        self._finish(Path(output_path))

    def optimize_inplace(self) -> None:
        self.calls.append(("optimize_inplace", None))
        self._finish(Path(self.input_path))

    def _finish(self, destination: Path) -> None:
        if self.failure is not None:
            raise OptimizationError.engine_failed(self.name, self.failure)
        if self.output_bytes is not None:
            destination.write_bytes(self.output_bytes)

    def _write(self, target: Path) -> None:  # pragma: no cover - run methods overridden
        raise AssertionError("not used")


@pytest.fixture()
def fake_engine(monkeypatch: pytest.MonkeyPatch) -> type[FakeOptimizer]:
    monkeypatch.setattr(FakeOptimizer, "instances", [])
    monkeypatch.setattr(FakeOptimizer, "output_bytes", b"%PDF-1.4 optimized")
    monkeypatch.setattr(FakeOptimizer, "failure", None)
    return FakeOptimizer
