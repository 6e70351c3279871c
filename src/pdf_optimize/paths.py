"""Output path derivation and path sanity checks."""

from __future__ import annotations

from pdf_optimize.errors import InvalidArgumentError
from pdf_optimize.profiles import Profile

PDF_SUFFIX = ".pdf"


def check_path(path: str) -> str:
    """Return ``path`` unchanged after rejecting empty or NUL-containing values."""
    if not path or "\x00" in path:
        raise InvalidArgumentError.invalid_path(path)
    return path


def resolve_output_path(
    input_path: str,
    explicit_output: str | None,
    in_place: bool,
    profile: Profile,
) -> str:
    """Return the destination for the optimized document.

    An explicit output wins and is returned verbatim.  In-place runs write
    back to ``input_path``.  Otherwise the name is generated from the input by
    dropping a trailing ``.pdf`` (exact, case-sensitive) and appending
    ``.<profile>.pdf``; ``doc.pdf`` becomes ``doc.ebook.pdf`` and ``doc``
    becomes ``doc.screen.pdf``.
    """
    if explicit_output is not None and in_place:
        raise InvalidArgumentError.output_with_inplace()
    if explicit_output is not None:
        return explicit_output
    if in_place:
        return input_path
    stem = input_path.removesuffix(PDF_SUFFIX)
    return f"{stem}.{profile.value}{PDF_SUFFIX}"


__all__ = ["PDF_SUFFIX", "check_path", "resolve_output_path"]
