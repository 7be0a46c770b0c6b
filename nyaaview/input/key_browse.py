"""Browse-mode keyboard handling."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..navigation import (
    QueryParams,
    accumulate_digit,
    consume_repeat_count,
    jump_first,
    jump_last,
    move_down,
    move_up,
)
from ..runtime.session import LINK_LISTING, LINK_MAGNET, LINK_TORRENT
from ..runtime.state import QUERY_MODE, SessionState
from .key_registry import KeyComboBinding, KeyComboRegistry

QUIT_KEYS = ("q", "CTRL_C")
DOWN_KEYS = ("j", "DOWN")
UP_KEYS = ("k", "UP")
LAST_KEYS = ("G", "END")
FIRST_KEYS = ("g", "HOME")
NEXT_PAGE_KEYS = ("n", "PAGE_DOWN")
PREV_PAGE_KEYS = ("p", "PAGE_UP")
SEARCH_KEYS = ("/",)
RESET_QUERY_KEYS = ("b",)
OPEN_LISTING_KEYS = ("o",)
OPEN_MAGNET_KEYS = ("m",)
OPEN_TORRENT_KEYS = ("t",)
MARK_VIEWED_KEYS = ("s",)
HELP_KEYS = ("h", "?")


@dataclass(frozen=True)
class BrowseKeyContext:
    """State and bound operations required for browse-mode key handling."""

    state: SessionState
    load_page: Callable[[QueryParams], Awaitable[bool]]
    open_selected: Callable[[str], None]
    mark_selected_viewed: Callable[[], None]


def _is_count_digit(key: str) -> bool:
    return len(key) == 1 and "0" <= key <= "9"


async def handle_browse_key(key: str, context: BrowseKeyContext) -> bool:
    """Handle one browse-mode key and return ``True`` when the session should end."""
    state = context.state

    if _is_count_digit(key):
        state.count_buffer = accumulate_digit(state.count_buffer, key)
        state.dirty = True
        return False

    def set_selection(selected: int | None) -> None:
        state.selected_idx = selected
        state.dirty = True

    async def quit_action() -> bool:
        return True

    async def down_action() -> bool:
        set_selection(move_down(state.selected_idx, amount, len(state.results)))
        return False

    async def up_action() -> bool:
        set_selection(move_up(state.selected_idx, amount, len(state.results)))
        return False

    async def last_action() -> bool:
        set_selection(jump_last(len(state.results)))
        return False

    async def first_action() -> bool:
        set_selection(jump_first(len(state.results)))
        return False

    async def next_page_action() -> bool:
        await context.load_page(state.params.next_page(amount))
        return False

    async def prev_page_action() -> bool:
        await context.load_page(state.params.prev_page(amount))
        return False

    async def search_action() -> bool:
        state.mode = QUERY_MODE
        state.query_buffer = ""
        state.dirty = True
        return False

    async def reset_query_action() -> bool:
        await context.load_page(state.params.with_query(""))
        return False

    def open_action(link: str):
        async def action() -> bool:
            context.open_selected(link)
            return False

        return action

    async def mark_viewed_action() -> bool:
        context.mark_selected_viewed()
        return False

    async def help_action() -> bool:
        state.show_help = True
        state.dirty = True
        return False

    bindings = KeyComboRegistry().register_bindings(
        KeyComboBinding(QUIT_KEYS, quit_action),
        KeyComboBinding(DOWN_KEYS, down_action),
        KeyComboBinding(UP_KEYS, up_action),
        KeyComboBinding(LAST_KEYS, last_action),
        KeyComboBinding(FIRST_KEYS, first_action),
        KeyComboBinding(NEXT_PAGE_KEYS, next_page_action),
        KeyComboBinding(PREV_PAGE_KEYS, prev_page_action),
        KeyComboBinding(SEARCH_KEYS, search_action),
        KeyComboBinding(RESET_QUERY_KEYS, reset_query_action),
        KeyComboBinding(OPEN_LISTING_KEYS, open_action(LINK_LISTING)),
        KeyComboBinding(OPEN_MAGNET_KEYS, open_action(LINK_MAGNET)),
        KeyComboBinding(OPEN_TORRENT_KEYS, open_action(LINK_TORRENT)),
        KeyComboBinding(MARK_VIEWED_KEYS, mark_viewed_action),
        KeyComboBinding(HELP_KEYS, help_action),
    )

    if key not in bindings:
        if key == "ESC" and state.count_buffer:
            state.count_buffer = ""
            state.dirty = True
        return False

    amount, state.count_buffer = consume_repeat_count(state.count_buffer)
    state.dirty = True
    handled = await bindings.dispatch(key)
    return bool(handled)
