"""Configuration helpers for the command line tool."""

from __future__ import annotations

import json
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path
from typing import Any, Literal

from pdf_optimize import utils

EngineChoice = Literal["auto", "ghostscript", "pymupdf"]

ENGINE_CHOICES: tuple[EngineChoice, ...] = ("auto", "ghostscript", "pymupdf")

_ENGINE_KEY = "engine"
_ENGINE_DEFAULT: EngineChoice = "auto"
_ENGINE_ALIASES: dict[str, EngineChoice] = {
    "auto": "auto",
    "ghostscript": "ghostscript",
    "gs": "ghostscript",
    "pymupdf": "pymupdf",
    "fitz": "pymupdf",
}

DEFAULT_CONFIG: dict[str, Any] = {
    _ENGINE_KEY: _ENGINE_DEFAULT,
    "ghostscript": "",
    "log_level": utils.DEFAULT_LOG_LEVEL,
}


def normalise_engine(value: Any) -> EngineChoice:
    """Return a canonical engine choice for ``value``."""
    if isinstance(value, str):
        alias = _ENGINE_ALIASES.get(value.strip().lower())
        if alias:
            return alias
    return _ENGINE_DEFAULT


def load_config_at(path: Path) -> dict:
    """Load configuration from a specific path.

    Missing or unreadable files fall back to :data:`DEFAULT_CONFIG`.
    """
    cfg = DEFAULT_CONFIG.copy()
    if path.exists():
        with suppress(Exception):
            data = json.loads(path.read_text())
            if isinstance(data, dict):
                cfg.update(data)
    cfg[_ENGINE_KEY] = normalise_engine(cfg.get(_ENGINE_KEY))
    return cfg


def load_config() -> dict:
    """Load configuration using :data:`pdf_optimize.utils.CONFIG_FILE`."""
    return load_config_at(utils.CONFIG_FILE)


def get_engine_choice(cfg: Mapping[str, object] | None = None) -> EngineChoice:
    """Return the configured engine, loading the config when ``cfg`` is omitted."""
    source = cfg if cfg is not None else load_config()
    return normalise_engine(source.get(_ENGINE_KEY, _ENGINE_DEFAULT))


def get_ghostscript_path(cfg: Mapping[str, object] | None = None) -> str | None:
    """Return the configured Ghostscript executable or ``None`` to search ``PATH``."""
    source = cfg if cfg is not None else load_config()
    value = source.get("ghostscript")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


__all__ = [
    "DEFAULT_CONFIG",
    "ENGINE_CHOICES",
    "EngineChoice",
    "get_engine_choice",
    "get_ghostscript_path",
    "load_config",
    "load_config_at",
    "normalise_engine",
]
