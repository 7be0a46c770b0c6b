"""Session-level operations shared by the key handlers.

Owns the refetch-replace-clamp cycle, record link opening, and the viewed
watermark update. Failures are reported through the status line.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..config import DEFAULT_VIEW_URL
from ..errors import FetchError, MarkerWriteError
from ..marker import ViewedMarkerStore
from ..navigation import QueryParams, clamp_selection
from ..opener import listing_url, open_url
from ..records import ResultRecord
from .state import SessionState

logger = logging.getLogger(__name__)

Fetcher = Callable[[QueryParams], Awaitable[list[ResultRecord]]]
UrlOpener = Callable[[str], str | None]

LINK_LISTING = "listing"
LINK_MAGNET = "magnet"
LINK_TORRENT = "torrent"


def set_status(state: SessionState, message: str, *, error: bool = False) -> None:
    """Show ``message`` in the status line until the next key press."""
    state.status_message = message
    state.status_is_error = error
    state.dirty = True


def clear_status(state: SessionState) -> None:
    if not state.status_message:
        return
    state.status_message = ""
    state.status_is_error = False
    state.dirty = True


class SessionController:
    """Bound operations over one ``SessionState``."""

    def __init__(
        self,
        state: SessionState,
        fetch: Fetcher,
        marker_store: ViewedMarkerStore,
        *,
        opener: UrlOpener = open_url,
        view_url: str = DEFAULT_VIEW_URL,
    ) -> None:
        self.state = state
        self._fetch = fetch
        self._marker_store = marker_store
        self._opener = opener
        self._view_url = view_url

    async def load_page(self, params: QueryParams) -> bool:
        """Fetch ``params`` and replace the result set on success.

        On failure the previous records, page, and query stay in place and
        the error is shown in the status line.
        """
        state = self.state
        try:
            records = await self._fetch(params)
        except FetchError as exc:
            logger.error("fetch failed for page=%d query=%r: %s", params.page, params.query, exc)
            set_status(state, f"Fetch failed: {exc}", error=True)
            return False
        state.params = params
        state.results.replace(records)
        state.selected_idx = clamp_selection(state.selected_idx, len(state.results))
        state.dirty = True
        return True

    def selected_record(self) -> ResultRecord | None:
        """Return the highlighted record, row 0 when nothing is highlighted."""
        results = self.state.results
        if not results:
            return None
        index = clamp_selection(self.state.selected_idx, len(results))
        return results.get(0 if index is None else index)

    def record_link(self, record: ResultRecord, link: str) -> str:
        if link == LINK_MAGNET:
            return record.magnet
        if link == LINK_TORRENT:
            return record.torrent
        return listing_url(self._view_url, record)

    def open_selected(self, link: str) -> None:
        record = self.selected_record()
        if record is None:
            set_status(self.state, "No listing selected.")
            return
        error = self._opener(self.record_link(record, link))
        if error is not None:
            logger.warning("open %s for #%s failed: %s", link, record.id, error)
            set_status(self.state, error, error=True)

    def mark_selected_viewed(self) -> None:
        """Move the viewed watermark to the selected record and persist it.

        The in-memory watermark changes even when the write fails.
        """
        state = self.state
        record = self.selected_record()
        if record is None:
            set_status(state, "No listing selected.")
            return
        value = record.numeric_id()
        state.last_viewed_id = value
        state.dirty = True
        try:
            self._marker_store.persist(value)
        except MarkerWriteError as exc:
            logger.error("%s", exc)
            set_status(state, f"Viewed marker not saved: {exc}", error=True)
            return
        set_status(state, f"Marked viewed up to #{value}.")
