"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the listing table, status bar, query prompt,
and help modal.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    table_header: str
    table_border: str
    seeders: str
    leechers: str
    size: str
    date: str
    status_error: str
    query_prompt: str
    query_hint: str
    help_heading: str
    help_key: str
    help_dim: str
    help_modal_title: str
    help_modal_border: str
    help_backdrop: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    table_header="\033[1;38;5;203;48;5;25m",
    table_border="\033[2m",
    seeders="\033[38;5;42m",
    leechers="\033[38;5;203m",
    size="\033[38;5;109m",
    date="\033[38;5;250m",
    status_error="\033[1;38;5;196m",
    query_prompt="\033[1;38;5;81m",
    query_hint="\033[2;38;5;250m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
    help_modal_title="\033[1;38;5;45m",
    help_modal_border="\033[38;5;45m",
    help_backdrop="\033[2m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    table_header="\033[1;38;5;45;48;5;17m",
    table_border="\033[2;38;5;31m",
    seeders="\033[38;5;84m",
    leechers="\033[38;5;215m",
    size="\033[38;5;73m",
    date="\033[38;5;153m",
    status_error="\033[1;38;5;209m",
    query_prompt="\033[1;38;5;45m",
    query_hint="\033[2;38;5;110m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
    help_modal_title="\033[1;38;5;39m",
    help_modal_border="\033[38;5;39m",
    help_backdrop="\033[2;38;5;24m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="\033[7m",
    reset="\033[0m",
    table_header="",
    table_border="",
    seeders="",
    leechers="",
    size="",
    date="",
    status_error="",
    query_prompt="",
    query_hint="",
    help_heading="",
    help_key="",
    help_dim="",
    help_modal_title="",
    help_modal_border="",
    help_backdrop="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode.

    The plain palette still keeps reverse video so the selected row stays
    visible without colors.
    """
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
