"""Common utilities shared by the pdf_optimize modules."""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_config_dir

# store configuration in a platform-specific user config directory
CONFIG_FILE = Path(user_config_dir("pdf_optimize")) / "pdf_optimize_config.json"

# central logger for the project
logger = logging.getLogger("pdf_optimize")
logger.propagate = False

DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(
    level: str = DEFAULT_LOG_LEVEL, handler: logging.Handler | None = None
) -> logging.Logger:
    """Configure and return the package logger."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(numeric)
    logger.handlers.clear()
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)

    # forward warnings.warn() calls through the logging system
    logging.captureWarnings(True)
    wlog = logging.getLogger("py.warnings")
    wlog.setLevel(numeric)
    wlog.handlers.clear()
    wlog.addHandler(handler)
    wlog.propagate = False
    return logger


# configure default logging on import
configure_logging()


__all__ = ["CONFIG_FILE", "DEFAULT_LOG_LEVEL", "configure_logging", "logger"]
