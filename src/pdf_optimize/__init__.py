"""Select a PDF optimization profile, run an engine and report the size change."""

from pdf_optimize.utils import configure_logging, logger

__version__ = "1.0.0"

__all__ = ["__version__", "configure_logging", "logger"]
