"""In-process optimization engine built on PyMuPDF and Pillow.

Images rendered above the preset resolution are downsampled and re-encoded
as JPEG; the document is then rewritten with garbage collection and deflated
streams.  An image is only replaced when the re-encoded stream is smaller than
the original one.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import ClassVar, TypedDict

import fitz  # type: ignore  # pdf-optimize: PyMuPDF lacks type hints
from PIL import Image

from pdf_optimize.engines.base import PdfOptimizer
from pdf_optimize.engines.registry import register
from pdf_optimize.errors import OptimizationError
from pdf_optimize.profiles import Profile
from pdf_optimize.utils import logger

POINTS_PER_INCH = 72

ERR_OPEN_PDF = "could not open PDF file: {path} ({exc})"
ERR_SAVE_PDF = "could not save PDF file: {path} ({exc})"


class ProfileSetting(TypedDict):
    """Image and stream settings of one preset."""

    dpi: int
    image_quality: int
    pdf_quality: int


PROFILE_SETTINGS: dict[Profile, ProfileSetting] = {
    Profile.SCREEN: {"dpi": 72, "image_quality": 40, "pdf_quality": 50},
    Profile.EBOOK: {"dpi": 150, "image_quality": 60, "pdf_quality": 75},
    Profile.PRINT: {"dpi": 300, "image_quality": 85, "pdf_quality": 90},
    Profile.PREPRESS: {"dpi": 300, "image_quality": 95, "pdf_quality": 100},
}


def _scale_for(width_px: int, rects: list[fitz.Rect], dpi: int) -> float:
    """Return the factor that brings the image down to ``dpi`` (at most ``1``)."""
    widest = max((rect.width for rect in rects), default=0)
    if widest <= 0:
        return 1.0
    effective = width_px / (widest / POINTS_PER_INCH)
    if effective <= dpi:
        return 1.0
    return dpi / effective


def _encode_image(
    doc: fitz.Document, xref: int, rects: list[fitz.Rect], dpi: int, quality: int
) -> bytes | None:
    pix = fitz.Pixmap(doc, xref)
    try:
        if pix.alpha or pix.colorspace is None or pix.width == 0 or pix.height == 0:
            return None
        if pix.colorspace.n not in (1, 3):
            original = pix
            pix = fitz.Pixmap(fitz.csRGB, original)
            del original
        mode = "L" if pix.n == 1 else "RGB"
        image = Image.frombytes(mode, (pix.width, pix.height), pix.samples)
    finally:
        del pix

    scale = _scale_for(image.width, rects, dpi)
    if scale < 1:
        size = (max(1, round(image.width * scale)), max(1, round(image.height * scale)))
        logger.debug("image xref %d: %s -> %s", xref, image.size, size)
        image = image.resize(size, Image.Resampling.LANCZOS)
    with io.BytesIO() as buf:
        image.save(buf, format="JPEG", quality=quality, optimize=True)
        return buf.getvalue()


def recompress_images(doc: fitz.Document, dpi: int, quality: int) -> int:
    """Downsample and re-encode the images of ``doc``; return how many changed."""
    seen: set[int] = set()
    replaced = 0
    for page in doc:
        for img in page.get_images(full=True):
            xref, smask = img[0], img[1]
            if xref in seen:
                continue
            seen.add(xref)
            # soft masks carry transparency that JPEG cannot keep
            if smask:
                continue
            data = _encode_image(doc, xref, page.get_image_rects(xref), dpi, quality)
            if data is None or len(data) >= len(doc.xref_stream_raw(xref) or b""):
                continue
            page.replace_image(xref, stream=data)
            replaced += 1
    return replaced


@register
class PyMuPdfOptimizer(PdfOptimizer):
    """Optimize documents in-process without external tools."""

    name: ClassVar[str] = "pymupdf"

    @property
    def settings(self) -> ProfileSetting:
        return PROFILE_SETTINGS[self.profile]

    def _write(self, target: Path) -> None:
        settings = self.settings
        dpi = self.dpi or settings["dpi"]
        try:
            doc = fitz.open(self.input_path)
        except Exception as exc:
            raise OptimizationError.engine_failed(
                self.name, ERR_OPEN_PDF.format(path=self.input_path, exc=exc)
            ) from exc
        try:
            replaced = recompress_images(doc, dpi, settings["image_quality"])
            logger.info("%s: re-encoded %d image(s) at %d dpi", self.name, replaced, dpi)
            compression_effort = max(0, min(9, (100 - settings["pdf_quality"]) // 10))
            doc.save(
                str(target),
                garbage=3,
                deflate=True,
                clean=True,
                compression_effort=compression_effort,
            )
        except Exception as exc:
            raise OptimizationError.engine_failed(
                self.name, ERR_SAVE_PDF.format(path=target, exc=exc)
            ) from exc
        finally:
            doc.close()


__all__ = ["PROFILE_SETTINGS", "ProfileSetting", "PyMuPdfOptimizer", "recompress_images"]
