"""Navigation primitives: cursor movement, count prefixes, and page arithmetic.

Nothing here touches the terminal.
Every function is pure and returns the new value instead of mutating state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .records import parse_unsigned

MIN_PAGE = 1
MAX_PAGE = 1000


@dataclass(frozen=True)
class QueryParams:
    """Page number and free-text query sent with each search request."""

    page: int = MIN_PAGE
    query: str = ""

    def next_page(self, amount: int) -> QueryParams:
        return replace(self, page=min(MAX_PAGE, self.page + max(0, amount)))

    def prev_page(self, amount: int) -> QueryParams:
        return replace(self, page=max(MIN_PAGE, self.page - max(0, amount)))

    def with_query(self, query: str) -> QueryParams:
        return replace(self, query=query)

    def normalized(self) -> QueryParams:
        """Return a copy with ``page`` forced into ``[MIN_PAGE, MAX_PAGE]``."""
        return replace(self, page=max(MIN_PAGE, min(MAX_PAGE, self.page)))


def clamp_selection(selected: int | None, length: int) -> int | None:
    """Re-validate ``selected`` against a result set of ``length`` rows."""
    if selected is None or length <= 0:
        return None
    return max(0, min(selected, length - 1))


def move_down(selected: int | None, amount: int, length: int) -> int | None:
    if length <= 0:
        return None
    if selected is None:
        return 0
    return clamp_selection(selected + max(0, amount), length)


def move_up(selected: int | None, amount: int, length: int) -> int | None:
    if length <= 0:
        return None
    if selected is None:
        return 0
    return clamp_selection(selected - max(0, amount), length)


def jump_first(length: int) -> int | None:
    return 0 if length > 0 else None


def jump_last(length: int) -> int | None:
    return length - 1 if length > 0 else None


def accumulate_digit(buffer: str, ch: str) -> str:
    """Append ``ch`` to the pending count when it is an ASCII digit."""
    if len(ch) == 1 and "0" <= ch <= "9":
        return buffer + ch
    return buffer


def consume_repeat_count(buffer: str) -> tuple[int, str]:
    """Return ``(amount, cleared_buffer)`` for a vim-style count prefix.

    Empty or unparseable buffers count as ``1``. The returned buffer is always
    empty so callers can assign it straight back.
    """
    if not buffer:
        return 1, ""
    return parse_unsigned(buffer, default=1), ""


def visible_window_start(selected: int | None, start: int, rows: int, length: int) -> int:
    """Return a scroll offset that keeps ``selected`` inside ``rows`` visible rows."""
    rows = max(1, rows)
    if selected is not None:
        if selected < start:
            start = selected
        elif selected >= start + rows:
            start = selected - rows + 1
    return max(0, min(start, max(0, length - rows)))


__all__ = [
    "MIN_PAGE",
    "MAX_PAGE",
    "QueryParams",
    "accumulate_digit",
    "clamp_selection",
    "consume_repeat_count",
    "jump_first",
    "jump_last",
    "move_down",
    "move_up",
    "visible_window_start",
]
