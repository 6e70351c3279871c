"""Optimization profiles and the resolution of profile-selecting flags.

The profile flags (``--style`` plus the ``--print``/``--ebook``/``--screen``/
``--prepress`` shorthands) form one mutually exclusive group.  They are parsed
into a single :class:`ProfileChoice` variant; supplying more than one flag is
rejected while the choice is built, so no priority rules are needed later.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

from pdf_optimize.errors import InvalidArgumentError


class Profile(StrEnum):
    """Named optimization preset understood by every engine."""

    SCREEN = "screen"
    EBOOK = "ebook"
    PRINT = "print"
    PREPRESS = "prepress"


DEFAULT_PROFILE = Profile.SCREEN
PROFILE_NAMES: tuple[str, ...] = tuple(profile.value for profile in Profile)


@dataclass(frozen=True, slots=True)
class ProfileChoice:
    """Base variant of the profile selection union."""

    flag: ClassVar[str] = ""

    def resolve(self) -> Profile:
        raise NotImplementedError

    @staticmethod
    def from_flags(
        style: str | None = None,
        *,
        screen: bool = False,
        ebook: bool = False,
        print_: bool = False,
        prepress: bool = False,
    ) -> ProfileChoice:
        """Build the single active variant from raw flag values.

        ``style`` is validated first so an unknown name is reported even when
        other profile flags are present.  The shorthand flags are listed in
        the order print, ebook, screen, prepress.
        """
        candidates: list[ProfileChoice] = []
        if style is not None:
            candidates.append(Named(style))
        shorthands = (
            (print_, PrintFlag),
            (ebook, EbookFlag),
            (screen, ScreenFlag),
            (prepress, PrepressFlag),
        )
        candidates.extend(variant() for given, variant in shorthands if given)
        if len(candidates) > 1:
            raise InvalidArgumentError.conflicting_flags(
                [candidate.flag for candidate in candidates]
            )
        if candidates:
            return candidates[0]
        return Unset()


@dataclass(frozen=True, slots=True)
class Unset(ProfileChoice):
    """No profile flag was given; the default profile applies."""

    def resolve(self) -> Profile:
        return DEFAULT_PROFILE


@dataclass(frozen=True, slots=True)
class Named(ProfileChoice):
    """Profile given by name through ``--style``."""

    flag: ClassVar[str] = "--style"
    name: str

    def __post_init__(self) -> None:
        # exact, case-sensitive match
        if self.name not in PROFILE_NAMES:
            raise InvalidArgumentError.invalid_style(PROFILE_NAMES)

    def resolve(self) -> Profile:
        return Profile(self.name)


@dataclass(frozen=True, slots=True)
class ScreenFlag(ProfileChoice):
    flag: ClassVar[str] = "--screen"

    def resolve(self) -> Profile:
        return Profile.SCREEN


@dataclass(frozen=True, slots=True)
class EbookFlag(ProfileChoice):
    flag: ClassVar[str] = "--ebook"

    def resolve(self) -> Profile:
        return Profile.EBOOK


@dataclass(frozen=True, slots=True)
class PrintFlag(ProfileChoice):
    flag: ClassVar[str] = "--print"

    def resolve(self) -> Profile:
        return Profile.PRINT


@dataclass(frozen=True, slots=True)
class PrepressFlag(ProfileChoice):
    flag: ClassVar[str] = "--prepress"

    def resolve(self) -> Profile:
        return Profile.PREPRESS


def select_profile(
    style: str | None = None,
    *,
    screen: bool = False,
    ebook: bool = False,
    print_: bool = False,
    prepress: bool = False,
) -> Profile:
    """Return the profile selected by the given flags.

    Raises:
        InvalidArgumentError: ``style`` is not a known profile name or more
            than one profile flag is set.
    """
    choice = ProfileChoice.from_flags(
        style, screen=screen, ebook=ebook, print_=print_, prepress=prepress
    )
    return choice.resolve()


__all__ = [
    "DEFAULT_PROFILE",
    "PROFILE_NAMES",
    "EbookFlag",
    "Named",
    "PrepressFlag",
    "PrintFlag",
    "Profile",
    "ProfileChoice",
    "ScreenFlag",
    "Unset",
    "select_profile",
]
