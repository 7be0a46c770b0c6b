"""Runtime composition layer for nyaaview.

Builds the initial session state, wires callbacks across runtime modules,
and runs the session loop inside an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from functools import partial

from ..api import NyaaClient
from ..config import DEFAULT_VIEW_URL
from ..input import BrowseKeyContext, handle_browse_key, handle_query_key
from ..marker import ViewedMarkerStore, load_marker
from ..navigation import QueryParams
from ..records import ResultRecord
from ..render import BrowseRenderContext, render_browse, render_help_page, render_query_prompt
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .loop import SessionLoopCallbacks, run_session_loop
from .session import SessionController
from .state import SessionState

logger = logging.getLogger(__name__)


def browse_render_context(state: SessionState, width: int, height: int, theme: UITheme) -> BrowseRenderContext:
    """Snapshot the fields of ``state`` the table renderer needs."""
    return BrowseRenderContext(
        records=state.results.records,
        selected=state.selected_idx,
        start=state.table_start,
        width=width,
        height=height,
        last_viewed_id=state.last_viewed_id,
        page=state.params.page,
        query=state.params.query,
        count_buffer=state.count_buffer,
        status_message=state.status_message,
        status_is_error=state.status_is_error,
        theme=theme,
    )


def build_loop_callbacks(session: SessionController, theme: UITheme) -> SessionLoopCallbacks:
    """Bind render and key-handling operations for ``session``."""
    state = session.state
    browse_context = BrowseKeyContext(
        state=state,
        load_page=session.load_page,
        open_selected=session.open_selected,
        mark_selected_viewed=session.mark_selected_viewed,
    )

    def render_browse_state(current: SessionState, width: int, height: int) -> None:
        render_browse(browse_render_context(current, width, height, theme))

    def render_query_state(current: SessionState, width: int, height: int) -> None:
        render_query_prompt(current.query_buffer, width, height, theme)

    return SessionLoopCallbacks(
        render_browse=render_browse_state,
        render_query_prompt=render_query_state,
        render_help=partial(render_help_page, theme=theme),
        handle_browse_key=partial(handle_browse_key, context=browse_context),
        handle_query_key=partial(handle_query_key, state=state, load_page=session.load_page),
    )


async def run_browser_async(
    params: QueryParams,
    client: NyaaClient,
    marker_store: ViewedMarkerStore,
    *,
    view_url: str = DEFAULT_VIEW_URL,
    theme: UITheme = DEFAULT_THEME,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> SessionState:
    """Fetch the first page and run the interactive session until quit.

    Returns the final session state; the client is closed on exit.
    """
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    state = SessionState(params=params.normalized(), last_viewed_id=load_marker(marker_store))
    session = SessionController(state, client.fetch, marker_store, view_url=view_url)
    logger.info(
        "session start page=%d query=%r watermark=%d",
        state.params.page,
        state.params.query,
        state.last_viewed_id,
    )
    try:
        await session.load_page(state.params)
        terminal = TerminalController(stdin_fd, stdout_fd)
        await run_session_loop(state, terminal, stdin_fd, build_loop_callbacks(session, theme))
    finally:
        await client.aclose()
    logger.info("session end")
    return state


def run_browser(
    params: QueryParams,
    client: NyaaClient,
    marker_store: ViewedMarkerStore,
    *,
    view_url: str = DEFAULT_VIEW_URL,
    theme: UITheme = DEFAULT_THEME,
) -> SessionState:
    """Synchronous wrapper used by the CLI."""
    return asyncio.run(
        run_browser_async(params, client, marker_store, view_url=view_url, theme=theme)
    )


async def fetch_once(params: QueryParams, client: NyaaClient) -> list[ResultRecord]:
    """Fetch a single page without starting the TUI (``--print`` mode)."""
    try:
        return await client.fetch(params.normalized())
    finally:
        await client.aclose()
