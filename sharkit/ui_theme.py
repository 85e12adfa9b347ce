"""ANSI palettes for the picker chrome and list rows.

Preview syntax colors come from a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    border: str
    title: str
    entry: str
    entry_dim: str
    cursor: str
    help_heading: str
    help_key: str
    count: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[38;5;245m",
    title="\033[1;38;5;81m",
    entry="\033[97m",
    entry_dim="\033[2;37m",
    cursor="\033[46;30m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    count="\033[1;38;5;81m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    border="\033[38;5;31m",
    title="\033[1;38;5;45m",
    entry="\033[38;5;153m",
    entry_dim="\033[2;38;5;110m",
    cursor="\033[48;5;39;38;5;16m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    count="\033[1;38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    border="",
    title="",
    entry="",
    entry_dim="",
    cursor="\033[7m",
    help_heading="",
    help_key="",
    count="",
)

THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME)}


def available_theme_names() -> tuple[str, ...]:
    return tuple(THEMES)


def normalize_theme_name(name: str | None) -> str:
    """Lower-case known theme names; anything else maps to ``default``."""
    key = (name or "").strip().lower()
    return key if key in THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Pick the palette for ``name``; ``no_color`` always wins with ``plain``."""
    return PLAIN_THEME if no_color else THEMES[normalize_theme_name(name)]
