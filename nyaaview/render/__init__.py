"""Rendering engine for the listing table, search prompt, and help modal.

Line builders are pure functions of session data; the ``render_*`` writers
compose full ANSI frames and write them to stdout in one call.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width, fit_cell
from ..navigation import MAX_PAGE
from ..records import ResultRecord
from ..ui_theme import DEFAULT_THEME, UITheme
from .help import help_lines, render_help_page

VIEWED_GLYPH = "✅"
UNVIEWED_GLYPH = "❌"
SELECTED_PREFIX = ">> "
COLUMN_HEADERS: tuple[str, ...] = ("Viewed", "Name", "Date", "Size", "Seeders", "Leechers")
CHROME_ROWS = 3
MIN_NAME_WIDTH = 8


@dataclass(frozen=True)
class TableColumns:
    """Display widths for each table column (the name column flexes)."""

    viewed: int
    name: int
    date: int
    size: int
    seeders: int
    leechers: int

    def widths(self) -> tuple[int, ...]:
        return (self.viewed, self.name, self.date, self.size, self.seeders, self.leechers)


def compute_columns(width: int) -> TableColumns:
    """Split ``width`` terminal columns between the six table columns.

    Fixed columns shrink in order (date, size) when the name column would
    drop below ``MIN_NAME_WIDTH``.
    """
    usable = max(1, width - 1) - len(SELECTED_PREFIX)
    viewed, date, size, seeders, leechers = 6, 16, 10, 7, 8
    gaps = len(COLUMN_HEADERS) - 1
    name = usable - gaps - viewed - date - size - seeders - leechers
    if name < MIN_NAME_WIDTH:
        shortfall = MIN_NAME_WIDTH - name
        cut = min(shortfall, date - 10)
        date -= cut
        shortfall -= cut
        cut = min(shortfall, size - 8)
        size -= cut
        name = max(1, usable - gaps - viewed - date - size - seeders - leechers)
    return TableColumns(viewed, name, date, size, seeders, leechers)


def table_body_rows(height: int) -> int:
    """Return how many record rows fit under the header and above the status bar."""
    return max(1, height - CHROME_ROWS)


def viewed_glyph(record: ResultRecord, last_viewed_id: int) -> str:
    return VIEWED_GLYPH if record.is_viewed(last_viewed_id) else UNVIEWED_GLYPH


def selected_with_ansi(text: str, theme: UITheme = DEFAULT_THEME) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", "\033[0;7m") + theme.reset


def build_header_line(columns: TableColumns, theme: UITheme = DEFAULT_THEME) -> str:
    cells = [fit_cell(title, col_width) for title, col_width in zip(COLUMN_HEADERS, columns.widths())]
    text = " " * len(SELECTED_PREFIX) + " ".join(cells)
    if not theme.table_header:
        return text
    return f"{theme.table_header}{text}{theme.reset}"


def build_record_line(
    record: ResultRecord,
    columns: TableColumns,
    last_viewed_id: int,
    *,
    selected: bool = False,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Return one table row for ``record``; the selected row is reverse video."""
    cells = (
        fit_cell(viewed_glyph(record, last_viewed_id), columns.viewed),
        fit_cell(record.name, columns.name),
        _styled(fit_cell(record.date, columns.date), theme.date, theme),
        _styled(fit_cell(record.filesize, columns.size), theme.size, theme),
        _styled(fit_cell(record.seeders, columns.seeders), theme.seeders, theme),
        _styled(fit_cell(record.leechers, columns.leechers), theme.leechers, theme),
    )
    prefix = SELECTED_PREFIX if selected else " " * len(SELECTED_PREFIX)
    line = prefix + " ".join(cells)
    return selected_with_ansi(line, theme) if selected else line


def _styled(text: str, sgr: str, theme: UITheme) -> str:
    if not sgr:
        return text
    return f"{sgr}{text}{theme.reset}"


def build_table_lines(
    records: Sequence[ResultRecord],
    selected: int | None,
    start: int,
    rows: int,
    width: int,
    last_viewed_id: int,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Return header, divider, and up to ``rows`` record lines.

    An out-of-range ``selected`` simply highlights nothing; callers clamp
    selection before rendering.
    """
    columns = compute_columns(width)
    divider = "─" * max(1, width - 1)
    lines = [
        build_header_line(columns, theme),
        f"{theme.table_border}{divider}{theme.reset}" if theme.table_border else divider,
    ]
    if not records:
        lines.append(" " * len(SELECTED_PREFIX) + "No results.")
        return lines
    end = min(len(records), max(0, start) + max(1, rows))
    for idx in range(max(0, start), end):
        lines.append(
            build_record_line(
                records[idx],
                columns,
                last_viewed_id,
                selected=(idx == selected),
                theme=theme,
            )
        )
    return lines


def build_status_line(left_text: str, width: int, right_text: str = "│ h Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = clip_ansi_line(left_text, left_limit)
    gap = " " * (usable - display_width(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def status_text(
    page: int,
    query: str,
    selected: int | None,
    total: int,
    count_buffer: str = "",
    message: str = "",
) -> str:
    """Return the left part of the status bar."""
    position = f"{selected + 1}/{total}" if selected is not None and total else f"-/{total}"
    parts = [f"Page {page}/{MAX_PAGE}", f"Query: {query}" if query else "Query: (none)", position]
    if count_buffer:
        parts.append(f"Count: {count_buffer}")
    if message:
        parts.append(message)
    return "  ".join(parts)


@dataclass
class BrowseRenderContext:
    records: Sequence[ResultRecord]
    selected: int | None
    start: int
    width: int
    height: int
    last_viewed_id: int
    page: int
    query: str
    count_buffer: str = ""
    status_message: str = ""
    status_is_error: bool = False
    theme: UITheme = DEFAULT_THEME


def build_browse_frame(context: BrowseRenderContext) -> str:
    """Compose the full browse-mode frame as one ANSI string."""
    theme = context.theme
    rows = table_body_rows(context.height)
    lines = build_table_lines(
        context.records,
        context.selected,
        context.start,
        rows,
        context.width,
        context.last_viewed_id,
        theme,
    )
    out: list[str] = ["\033[H\033[J"]
    for line in lines[: max(1, context.height - 1)]:
        out.append(clip_ansi_line(line, max(1, context.width - 1)))
        out.append("\033[0m\r\n")
    for _ in range(len(lines), max(1, context.height - 1)):
        out.append("\r\n")

    left = status_text(
        context.page,
        context.query,
        context.selected,
        len(context.records),
        context.count_buffer,
        context.status_message,
    )
    status = build_status_line(left, context.width)
    if context.status_is_error and theme.status_error:
        out.append(f"{theme.status_error}{theme.reverse}{status}{theme.reset}")
    else:
        out.append(f"{theme.reverse}{status}{theme.reset}")
    return "".join(out)


def render_browse(context: BrowseRenderContext) -> None:
    os.write(sys.stdout.fileno(), build_browse_frame(context).encode("utf-8", errors="replace"))


def build_query_prompt_frame(query: str, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> str:
    """Compose the single-line search prompt, centered in the top fifth of the screen."""
    prompt = f"Search: {query}█"
    hint = "Enter search  Esc cancel  Backspace delete"
    usable = max(1, width - 1)
    prompt = clip_ansi_line(prompt, usable)
    row = max(1, height // 5)
    prompt_col = max(1, (usable - display_width(prompt)) // 2 + 1)
    hint_col = max(1, (usable - display_width(hint)) // 2 + 1)
    return "".join(
        [
            "\033[H\033[J",
            f"\033[{row};{prompt_col}H{theme.query_prompt}{prompt}{theme.reset}",
            f"\033[{row + 2};{hint_col}H{theme.query_hint}{clip_ansi_line(hint, usable)}{theme.reset}",
        ]
    )


def render_query_prompt(query: str, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> None:
    os.write(
        sys.stdout.fileno(),
        build_query_prompt_frame(query, width, height, theme).encode("utf-8", errors="replace"),
    )


__all__ = [
    "BrowseRenderContext",
    "COLUMN_HEADERS",
    "SELECTED_PREFIX",
    "UNVIEWED_GLYPH",
    "VIEWED_GLYPH",
    "TableColumns",
    "build_browse_frame",
    "build_header_line",
    "build_query_prompt_frame",
    "build_record_line",
    "build_status_line",
    "build_table_lines",
    "compute_columns",
    "help_lines",
    "render_browse",
    "render_help_page",
    "render_query_prompt",
    "status_text",
    "table_body_rows",
    "viewed_glyph",
]
