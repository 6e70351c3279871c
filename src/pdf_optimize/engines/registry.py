"""Registry of the available optimization engines."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from pdf_optimize.config import EngineChoice, get_engine_choice
from pdf_optimize.utils import logger

if TYPE_CHECKING:
    from pdf_optimize.engines.base import PdfOptimizer

_AUTO_PRIORITY = ("ghostscript", "pymupdf")
_BUILTIN_MODULES = {
    "ghostscript": "pdf_optimize.engines.ghostscript",
    "pymupdf": "pdf_optimize.engines.pymupdf",
}

_REGISTRY: dict[str, type[PdfOptimizer]] = {}


class EngineSelectionError(LookupError):
    """Raised when no engine matches the requested name."""


def register(engine_cls: type[PdfOptimizer]) -> type[PdfOptimizer]:
    """Register ``engine_cls`` under its ``name`` attribute."""
    name = getattr(engine_cls, "name", "")
    if not isinstance(name, str) or not name.strip():
        msg = f"Engine class {engine_cls.__name__} must define a non-empty 'name' attribute."
        raise ValueError(msg)
    key = name.strip().lower()
    existing = _REGISTRY.get(key)
    if existing is not None and existing is not engine_cls:
        msg = f"Engine '{name}' is already registered with {existing.__module__}.{existing.__name__}"
        raise ValueError(msg)
    _REGISTRY[key] = engine_cls
    return engine_cls


def _ensure_builtin_registered(name: str) -> None:
    module = _BUILTIN_MODULES.get(name)
    if module is not None and name not in _REGISTRY:
        importlib.import_module(module)


def available() -> tuple[str, ...]:
    """Return registered engine names."""
    for name in _BUILTIN_MODULES:
        _ensure_builtin_registered(name)
    return tuple(_REGISTRY)


def get(name: str) -> type[PdfOptimizer]:
    """Return the engine class registered as ``name``."""
    key = name.strip().lower()
    _ensure_builtin_registered(key)
    try:
        return _REGISTRY[key]
    except KeyError as exc:
        msg = f"unknown engine: {name}"
        raise EngineSelectionError(msg) from exc


def select(choice: EngineChoice | str | None = None) -> type[PdfOptimizer]:
    """Return the engine class for ``choice``.

    ``None`` reads the configured choice.  ``"auto"`` probes the engines in
    priority order and falls back to the last one, which runs in-process.
    """
    if choice is None:
        choice = get_engine_choice()
    if choice != "auto":
        return get(choice)
    for name in _AUTO_PRIORITY:
        engine_cls = get(name)
        if engine_cls.is_available():
            logger.info("engine '%s' selected automatically", name)
            return engine_cls
        logger.info("engine '%s' unavailable, trying next", name)
    return get(_AUTO_PRIORITY[-1])


__all__ = ["EngineSelectionError", "available", "get", "register", "select"]
