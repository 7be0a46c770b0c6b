from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from unittest import mock

from nyaaview.navigation import QueryParams
from nyaaview.records import ResultRecord, ResultSet
from nyaaview.runtime import SessionLoopCallbacks, run_session_loop
from nyaaview.runtime.loop import prepare_frame
from nyaaview.runtime.state import BROWSE_MODE, QUERY_MODE, SessionState


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


def _make_state(count: int = 3, **overrides) -> SessionState:
    records = [ResultRecord(id=str(idx + 1), name=f"r{idx}") for idx in range(count)]
    state = SessionState(params=QueryParams(), results=ResultSet(records))
    for name, value in overrides.items():
        setattr(state, name, value)
    return state


class SessionLoopTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.events: list[str] = []
        self.browse_keys: list[str] = []
        self.query_keys: list[str] = []

    def _callbacks(self, state: SessionState) -> SessionLoopCallbacks:
        async def handle_browse_key(key: str) -> bool:
            self.events.append(f"browse:{key}")
            self.browse_keys.append(key)
            return key == "q"

        async def handle_query_key(key: str) -> None:
            self.events.append(f"query:{key}")
            self.query_keys.append(key)
            if key == "ENTER":
                state.mode = BROWSE_MODE
                state.dirty = True

        return SessionLoopCallbacks(
            render_browse=lambda _state, _w, _h: self.events.append("render_browse"),
            render_query_prompt=lambda _state, _w, _h: self.events.append("render_query"),
            render_help=lambda _w, _h: self.events.append("render_help"),
            handle_browse_key=handle_browse_key,
            handle_query_key=handle_query_key,
        )

    async def _run(self, state: SessionState, keys: list, sizes=None) -> _FakeTerminal:
        terminal = _FakeTerminal()
        size_values = sizes or [(80, 24)]

        def terminal_size(_fallback):
            columns, lines = size_values[0] if len(size_values) == 1 else size_values.pop(0)
            return os.terminal_size((columns, lines))

        with mock.patch("nyaaview.runtime.loop.read_key", side_effect=keys), mock.patch(
            "nyaaview.runtime.loop.shutil.get_terminal_size", side_effect=terminal_size
        ):
            await run_session_loop(state, terminal, 0, self._callbacks(state))
        return terminal

    async def test_renders_before_reading_first_key_and_quits(self) -> None:
        terminal = await self._run(_make_state(), ["q"])
        self.assertEqual(self.events, ["render_browse", "browse:q"])
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))

    async def test_clean_state_is_not_redrawn_on_idle_poll(self) -> None:
        await self._run(_make_state(), ["", "", "q"])
        self.assertEqual(self.events.count("render_browse"), 1)

    async def test_terminal_resize_triggers_redraw(self) -> None:
        await self._run(_make_state(), ["", "", "q"], sizes=[(80, 24), (80, 24), (100, 30)])
        self.assertEqual(self.events.count("render_browse"), 2)

    async def test_help_modal_closes_on_any_key_without_dispatching_it(self) -> None:
        state = _make_state(show_help=True)
        await self._run(state, ["x", "q"])
        self.assertEqual(self.events, ["render_help", "render_browse", "browse:q"])
        self.assertFalse(state.show_help)

    async def test_query_mode_gets_keys_and_crlf_is_one_enter(self) -> None:
        state = _make_state(mode=QUERY_MODE)
        await self._run(state, ["a", "ENTER_CR", "ENTER_LF", "q"])
        self.assertEqual(self.query_keys, ["a", "ENTER"])
        self.assertEqual(self.browse_keys, ["q"])
        self.assertEqual(self.events[0], "render_query")

    async def test_lone_line_feed_is_enter(self) -> None:
        state = _make_state(mode=QUERY_MODE)
        await self._run(state, ["ENTER_LF", "q"])
        self.assertEqual(self.query_keys, ["ENTER"])

    async def test_status_message_clears_on_next_key(self) -> None:
        state = _make_state(status_message="Fetch failed: offline", status_is_error=True)
        await self._run(state, ["j", "q"])
        self.assertEqual(state.status_message, "")
        self.assertFalse(state.status_is_error)

    async def test_closed_input_stream_ends_session(self) -> None:
        terminal = await self._run(_make_state(), ["", "EOF"])
        self.assertEqual(self.browse_keys, [])
        self.assertEqual(terminal.exited, 1)

    async def test_keyboard_interrupt_during_read_is_ignored(self) -> None:
        await self._run(_make_state(), [KeyboardInterrupt(), "q"])
        self.assertEqual(self.browse_keys, ["q"])

    async def test_terminal_is_restored_when_handler_raises(self) -> None:
        state = _make_state()
        terminal = _FakeTerminal()

        async def boom(_key: str) -> bool:
            raise RuntimeError("boom")

        callbacks = SessionLoopCallbacks(
            render_browse=lambda *_args: None,
            render_query_prompt=lambda *_args: None,
            render_help=lambda *_args: None,
            handle_browse_key=boom,
            handle_query_key=boom,
        )
        with mock.patch("nyaaview.runtime.loop.read_key", side_effect=["j"]), mock.patch(
            "nyaaview.runtime.loop.shutil.get_terminal_size", return_value=os.terminal_size((80, 24))
        ):
            with self.assertRaises(RuntimeError):
                await run_session_loop(state, terminal, 0, callbacks)
        self.assertEqual(terminal.exited, 1)


class PrepareFrameTests(unittest.TestCase):
    def test_clamps_selection_after_shrink(self) -> None:
        state = _make_state(count=3, selected_idx=10, dirty=False)
        prepare_frame(state, 24)
        self.assertEqual(state.selected_idx, 2)
        self.assertTrue(state.dirty)

    def test_scrolls_window_to_keep_selection_visible(self) -> None:
        state = _make_state(count=100, selected_idx=50)
        prepare_frame(state, 13)
        self.assertEqual(state.table_start, 41)
        state.selected_idx = 5
        prepare_frame(state, 13)
        self.assertEqual(state.table_start, 5)


if __name__ == "__main__":
    unittest.main()
