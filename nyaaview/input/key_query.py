"""Query-entry keyboard handling for the search prompt."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from ..navigation import QueryParams
from ..runtime.state import BROWSE_MODE, SessionState


async def handle_query_key(
    key: str,
    state: SessionState,
    load_page: Callable[[QueryParams], Awaitable[bool]],
) -> None:
    """Edit the pending query, or commit/cancel it and return to browse mode.

    ``ENTER`` commits the buffer as the new query and refetches the current
    page. ``ESC`` leaves the prompt without fetching.
    """
    if key == "ENTER":
        query = state.query_buffer
        state.mode = BROWSE_MODE
        state.query_buffer = ""
        state.dirty = True
        await load_page(state.params.with_query(query))
        return
    if key == "ESC":
        state.mode = BROWSE_MODE
        state.query_buffer = ""
        state.dirty = True
        return
    if key == "BACKSPACE":
        state.query_buffer = state.query_buffer[:-1]
        state.dirty = True
        return
    if key == "CTRL_U":
        state.query_buffer = ""
        state.dirty = True
        return
    if len(key) == 1 and key.isprintable():
        state.query_buffer += key
        state.dirty = True
