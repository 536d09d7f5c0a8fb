"""Theme names and the colors they resolve to.

A theme is stored by name. Local mode renders with a single accent color
per theme; remote mode renders with a four-color semantic palette. Both
resolvers are total: a name outside the supported set falls back to a
default instead of failing. Only ``validate_theme`` rejects unknown names,
and it is what change-theme operations call before storing anything.

Example:
    >>> accent_for("Oasis")
    'cyan'
    >>> palette_for("Midnight") == PALETTES[Theme.DESERT]
    True

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from task_tracker.exceptions import InvalidInputError


class Theme(Enum):
    """Supported theme names."""

    DESERT = "Desert"
    OASIS = "Oasis"
    FOREST = "Forest"
    SNOW = "Snow"

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(theme.value for theme in cls)


DEFAULT_THEME = Theme.DESERT


@dataclass(frozen=True)
class Palette:
    """Semantic colors used for remote-mode output.

    Values are anything ``rich`` accepts as a color, here hex triples.
    """

    success: str
    error: str
    warning: str
    info: str


ACCENTS: dict[Theme, str] = {
    Theme.DESERT: "yellow",
    Theme.OASIS: "cyan",
    Theme.FOREST: "green",
    Theme.SNOW: "white",
}
FALLBACK_ACCENT = "blue"

PALETTES: dict[Theme, Palette] = {
    Theme.DESERT: Palette(success="#C2B280", error="#A0522D", warning="#EDC9AF", info="#D2B48C"),
    Theme.OASIS: Palette(success="#3CB371", error="#CD5C5C", warning="#F0E68C", info="#40E0D0"),
    Theme.FOREST: Palette(success="#228B22", error="#8B0000", warning="#DAA520", info="#2E8B57"),
    Theme.SNOW: Palette(success="#B0E0E6", error="#F08080", warning="#FFFACD", info="#F8F8FF"),
}


def _lookup(name: str) -> Theme | None:
    try:
        return Theme(name)
    except ValueError:
        return None


def accent_for(name: str) -> str:
    """Return the local-mode accent color for a theme name."""
    theme = _lookup(name)
    if theme is None:
        return FALLBACK_ACCENT
    return ACCENTS[theme]


def palette_for(name: str) -> Palette:
    """Return the remote-mode palette; unknown names get the Desert palette."""
    theme = _lookup(name)
    return PALETTES[theme or DEFAULT_THEME]


def validate_theme(name: str) -> Theme:
    """Check a requested theme name against the supported set.

    Matching is exact, as in the stored document.

    Raises:
        InvalidInputError: If the name is not a supported theme.
    """
    theme = _lookup(name)
    if theme is None:
        raise InvalidInputError(
            f"Invalid theme '{name}'. Must be one of: {', '.join(Theme.names())}",
            value=name,
            allowed=Theme.names(),
        )
    return theme
