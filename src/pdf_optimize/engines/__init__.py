"""PDF optimization engines and their registry."""

from pdf_optimize.engines.base import EngineFactory, PdfOptimizer
from pdf_optimize.engines.registry import EngineSelectionError, available, select

__all__ = [
    "EngineFactory",
    "EngineSelectionError",
    "PdfOptimizer",
    "available",
    "select",
]
