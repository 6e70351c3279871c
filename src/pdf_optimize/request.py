"""The immutable execution plan built from command line input."""

from __future__ import annotations

import typing as t
from dataclasses import dataclass

from pdf_optimize.errors import InvalidArgumentError
from pdf_optimize.paths import check_path, resolve_output_path
from pdf_optimize.profiles import Profile, ProfileChoice


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """Everything a single optimization run needs, resolved up front."""

    input_path: str
    output_path: str
    profile: Profile
    dpi_override: int | None = None
    in_place: bool = False
    silent: bool = False
    engine: str = "auto"

    @classmethod
    def from_cli(  # noqa: PLR0913
        cls,
        positionals: t.Sequence[str],
        *,
        style: str | None = None,
        screen: bool = False,
        ebook: bool = False,
        print_: bool = False,
        prepress: bool = False,
        in_place: bool = False,
        silent: bool = False,
        dpi: int = 0,
        engine: str = "auto",
    ) -> InvocationRequest:
        """Validate raw command line values and build the request.

        Checks run in this order: the ``--style`` value, the number of
        positional arguments, an output argument combined with ``--inplace``
        and finally conflicting profile flags.

        Raises:
            InvalidArgumentError: Any of the checks fails.
        """
        if style is not None:
            # reject unknown names before looking at anything else
            ProfileChoice.from_flags(style)
        if not 1 <= len(positionals) <= 2:  # noqa: PLR2004
            raise InvalidArgumentError.argument_count()
        if in_place and len(positionals) > 1:
            raise InvalidArgumentError.output_with_inplace()
        profile = ProfileChoice.from_flags(
            style, screen=screen, ebook=ebook, print_=print_, prepress=prepress
        ).resolve()

        input_path = check_path(positionals[0])
        explicit_output = check_path(positionals[1]) if len(positionals) > 1 else None
        output_path = resolve_output_path(input_path, explicit_output, in_place, profile)
        return cls(
            input_path=input_path,
            output_path=output_path,
            profile=profile,
            dpi_override=dpi if dpi > 0 else None,
            in_place=in_place,
            silent=silent,
            engine=engine,
        )


__all__ = ["InvocationRequest"]
