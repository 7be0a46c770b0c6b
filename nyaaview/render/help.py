"""Help text and full-screen help modal rendering.

Rendering here is presentation-only and never mutates session state.
"""

from __future__ import annotations

import os
import sys

from ..ansi import clip_ansi_line, display_width
from ..ui_theme import DEFAULT_THEME, UITheme

HELP_TITLE = "nyaaview help"

# (keys, description) pairs; an empty keys entry starts a new section heading.
HELP_ENTRIES: tuple[tuple[str, str], ...] = (
    ("", "Listings"),
    ("<n>j / Down", "move down n rows (default 1)"),
    ("<n>k / Up", "move up n rows (default 1)"),
    ("g / G", "jump to first / last row"),
    ("o", "open the selected listing in the web browser"),
    ("m", "open the selected listing's magnet link"),
    ("t", "open the selected listing's torrent file"),
    ("s", "mark everything up to the selected listing as viewed"),
    ("", "Pages and search"),
    ("<n>n", "go n pages forward (like 5n)"),
    ("<n>p", "go n pages back (like 5p)"),
    ("/", "search; Enter runs the query, Esc cancels"),
    ("b", "clear the query and reload the current page"),
    ("", "General"),
    ("h / ?", "show this help"),
    ("q", "quit"),
)


def help_lines(theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Return styled help body lines."""
    key_width = max(len(keys) for keys, _ in HELP_ENTRIES if keys)
    lines: list[str] = []
    for keys, description in HELP_ENTRIES:
        if not keys:
            if lines:
                lines.append("")
            lines.append(f"{theme.help_heading}{description}{theme.reset}")
            continue
        padded = keys.ljust(key_width)
        lines.append(f"  {theme.help_key}{padded}{theme.reset}  {description}")
    return lines


def render_help_page(width: int, height: int, theme: UITheme = DEFAULT_THEME) -> None:
    """Render the full-screen modal help page directly to stdout."""
    out: list[str] = []
    out.append("\033[H\033[J")

    body = help_lines(theme)
    body.append("")
    body.append(f"{theme.help_dim}Press any key to close{theme.reset}")

    modal_w = min(76, max(20, width - 4))
    modal_h = min(len(body) + 3, max(5, height - 2))
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)
    inner_w = max(1, modal_w - 2)
    inner_h = max(1, modal_h - 2)

    for row in range(height):
        out.append(f"\033[{row + 1};1H{theme.help_backdrop}")
        out.append(" " * max(1, width - 1))
        out.append(theme.reset)

    border = theme.help_modal_border
    out.append(f"\033[{y + 1};{x + 1}H{border}╭")
    out.append("─" * inner_w)
    out.append(f"╮{theme.reset}")
    for i in range(inner_h):
        out.append(f"\033[{y + 2 + i};{x + 1}H{border}│{theme.reset}")
        out.append(" " * inner_w)
        out.append(f"{border}│{theme.reset}")
    out.append(f"\033[{y + modal_h};{x + 1}H{border}╰")
    out.append("─" * inner_w)
    out.append(f"╯{theme.reset}")

    title_x = x + max(2, (modal_w - 2 - display_width(HELP_TITLE)) // 2)
    out.append(f"\033[{y + 1};{title_x + 1}H")
    out.append(f"{theme.help_modal_title}{HELP_TITLE}{theme.reset}")

    body_rows = min(len(body), inner_h - 1)
    for i in range(body_rows):
        text = clip_ansi_line(body[i], inner_w - 2)
        out.append(f"\033[{y + 2 + i};{x + 3}H")
        out.append(text)
        out.append(theme.reset)

    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))
