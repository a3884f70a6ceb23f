"""UI theme definitions and selection helpers.

A theme is an immutable palette of ANSI sequences built once at startup and
passed into every render call. Users may override individual roles with
ANSI palette indices (0-15) in the config file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

from pygments.console import codes, dark_colors, esc, light_colors

COLOR_ROLES: tuple[str, ...] = ("fg", "border", "inactive", "active", "selection")


def ansi_palette_code(index: object) -> str | None:
    """Return the escape sequence for palette ``index`` 0-15, else ``None``."""
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    palette = dark_colors + light_colors
    if not 0 <= index < len(palette):
        return None
    name = palette[index]
    if name == "white":
        # pygments.console aliases "white" to bold.
        return esc + "97m"
    return codes[name]


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    fg: str
    border: str
    inactive: str
    active: str
    selection: str
    bold: str
    reset: str

    def with_overrides(self, colors: Mapping[str, object]) -> UITheme:
        """Return a copy with valid palette-index overrides applied per role."""
        changes: dict[str, str] = {}
        for role in COLOR_ROLES:
            code = ansi_palette_code(colors.get(role))
            if code is not None:
                changes[role] = code
        if not changes:
            return self
        return replace(self, **changes)


DEFAULT_THEME = UITheme(
    name="default",
    fg=ansi_palette_code(15) or "",
    border=ansi_palette_code(15) or "",
    inactive=ansi_palette_code(8) or "",
    active=ansi_palette_code(1) or "",
    selection=ansi_palette_code(2) or "",
    bold=codes["bold"],
    reset="\033[0m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    fg="\033[38;5;252m",
    border="\033[38;5;31m",
    inactive="\033[2;38;5;110m",
    active="\033[38;5;45m",
    selection="\033[38;5;215m",
    bold=codes["bold"],
    reset="\033[0m",
)

PLAIN_THEME = UITheme(
    name="plain",
    fg="",
    border="",
    inactive="",
    active="",
    selection="",
    bold="",
    reset="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable theme names, including ``plain``."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(
    name: str | None,
    *,
    no_color: bool = False,
    colors: Mapping[str, object] | None = None,
) -> UITheme:
    """Return the concrete theme for the requested name, color mode and overrides."""
    if no_color:
        return PLAIN_THEME
    theme = _THEMES.get(normalize_theme_name(name), DEFAULT_THEME)
    if colors:
        theme = theme.with_overrides(colors)
    return theme


__all__ = [
    "COLOR_ROLES",
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "ansi_palette_code",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
