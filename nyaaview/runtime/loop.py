"""Main interactive event loop for the terminal UI.

Renders when the session is dirty, then blocks for one key and dispatches it
to the help modal, the query prompt, or browse mode. Fetches triggered by a
key are awaited before the next key is read, so at most one is in flight.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..input import EOF_KEY, read_key
from ..navigation import clamp_selection, visible_window_start
from ..render import table_body_rows
from ..terminal import TerminalController
from .session import clear_status
from .state import QUERY_MODE, SessionState

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 250


@dataclass(frozen=True)
class SessionLoopCallbacks:
    """Injected render and key-handling operations used by ``run_session_loop``."""

    render_browse: Callable[[SessionState, int, int], None]
    render_query_prompt: Callable[[SessionState, int, int], None]
    render_help: Callable[[int, int], None]
    handle_browse_key: Callable[[str], Awaitable[bool]]
    handle_query_key: Callable[[str], Awaitable[None]]


def _normalize_enter(state: SessionState, key: str) -> str | None:
    """Fold CR, LF, and CRLF into a single ``ENTER`` token.

    Returns ``None`` for the LF half of a CRLF pair.
    """
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    if key == "ENTER_CR":
        state.skip_next_lf = True
        return "ENTER"
    state.skip_next_lf = False
    if key == "ENTER_LF":
        return "ENTER"
    return key


def prepare_frame(state: SessionState, term_lines: int) -> None:
    """Re-validate selection and scroll offset against the current result set."""
    total = len(state.results)
    selected = clamp_selection(state.selected_idx, total)
    if selected != state.selected_idx:
        state.selected_idx = selected
        state.dirty = True
    start = visible_window_start(state.selected_idx, state.table_start, table_body_rows(term_lines), total)
    if start != state.table_start:
        state.table_start = start
        state.dirty = True


async def run_session_loop(
    state: SessionState,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: SessionLoopCallbacks,
) -> None:
    """Run the interactive loop until a quit key is handled."""
    ops = callbacks
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                state.dirty = True
            prepare_frame(state, term.lines)

            if state.dirty:
                if state.show_help:
                    ops.render_help(term.columns, term.lines)
                elif state.mode == QUERY_MODE:
                    ops.render_query_prompt(state, term.columns, term.lines)
                else:
                    ops.render_browse(state, term.columns, term.lines)
                state.dirty = False

            try:
                raw_key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if raw_key == "":
                continue
            if raw_key == EOF_KEY:
                logger.info("input stream closed; ending session")
                break
            key = _normalize_enter(state, raw_key)
            if key is None:
                continue

            if state.show_help:
                state.show_help = False
                state.dirty = True
                continue

            clear_status(state)
            if state.mode == QUERY_MODE:
                await ops.handle_query_key(key)
                continue
            if await ops.handle_browse_key(key):
                break
