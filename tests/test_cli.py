"""CLI argument handling and entrypoint dispatch tests."""

from __future__ import annotations

import io
import tempfile
import unittest
from contextlib import ExitStack
from pathlib import Path
from unittest import mock

from nyaaview import cli
from nyaaview.errors import NetworkError
from nyaaview.marker import FileMarkerStore, MemoryMarkerStore
from nyaaview.navigation import QueryParams
from nyaaview.records import ResultRecord
from nyaaview.ui_theme import OCEAN_THEME


class _TerminalBuffer(io.StringIO):
    def isatty(self) -> bool:
        return True


class CliParserTests(unittest.TestCase):
    def test_query_words_and_page(self) -> None:
        args = cli.build_parser().parse_args(["--page", "7", "one", "piece"])
        self.assertEqual(args.page, 7)
        self.assertEqual(args.query, ["one", "piece"])

    def test_page_outside_range_is_rejected(self) -> None:
        for value in ("0", "1001", "abc"):
            with mock.patch("sys.stderr", new_callable=io.StringIO):
                with self.assertRaises(SystemExit):
                    cli.build_parser().parse_args(["--page", value])

    def test_timeout_must_be_positive(self) -> None:
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                cli.build_parser().parse_args(["--timeout", "0"])


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self._stack = ExitStack()
        self._stack.enter_context(mock.patch("nyaaview.config.CONFIG_PATH", self.tmp / "config.json"))
        self._stack.enter_context(mock.patch("nyaaview.cli.configure_logging"))

    def tearDown(self) -> None:
        self._stack.close()
        self._tmp.cleanup()

    def _tty(self, is_tty: bool) -> None:
        for name in ("stdin", "stdout"):
            stream = mock.Mock()
            stream.isatty.return_value = is_tty
            self._stack.enter_context(mock.patch(f"nyaaview.cli.sys.{name}", stream))

    def test_main_launches_browser_with_joined_query(self) -> None:
        self._tty(True)
        marker_path = self.tmp / "last_viewed"
        with mock.patch("nyaaview.cli.run_browser") as run_browser:
            cli.main(["--page", "3", "--marker-file", str(marker_path), "one", "piece"])

        run_browser.assert_called_once()
        params, client, store = run_browser.call_args.args
        self.assertEqual(params, QueryParams(page=3, query="one piece"))
        self.assertEqual(client.base_url, "https://nyaa-api.fly.dev")
        self.assertIsInstance(store, FileMarkerStore)
        self.assertEqual(store.path, marker_path)
        self.assertEqual(run_browser.call_args.kwargs["view_url"], "https://nyaa.si/view/")

    def test_no_persist_seeds_memory_store_from_file(self) -> None:
        self._tty(True)
        marker_path = self.tmp / "last_viewed"
        marker_path.write_text("55\n", encoding="utf-8")
        with mock.patch("nyaaview.cli.run_browser") as run_browser:
            cli.main(["--no-persist", "--marker-file", str(marker_path)])

        store = run_browser.call_args.args[2]
        self.assertIsInstance(store, MemoryMarkerStore)
        self.assertEqual(store.load(), 55)

    def test_theme_flag_is_remembered(self) -> None:
        self._tty(True)
        with mock.patch("nyaaview.cli.run_browser") as run_browser:
            cli.main(["--theme", "ocean", "--marker-file", str(self.tmp / "m")])
        self.assertEqual(run_browser.call_args.kwargs["theme"].name, "ocean")
        self.assertIn('"theme": "ocean"', (self.tmp / "config.json").read_text(encoding="utf-8"))

    def test_non_interactive_terminal_exits_with_hint(self) -> None:
        self._tty(False)
        with mock.patch("nyaaview.cli.run_browser") as run_browser:
            with self.assertRaises(SystemExit) as caught:
                cli.main(["--marker-file", str(self.tmp / "m")])
        run_browser.assert_not_called()
        self.assertIn("--print", str(caught.exception.code))

    def test_print_mode_writes_table_without_tui(self) -> None:
        records = [ResultRecord(id="9", name="Printed Show", seeders="4")]
        out = io.StringIO()
        with mock.patch("nyaaview.cli.fetch_once", new_callable=mock.AsyncMock, return_value=records), mock.patch(
            "nyaaview.cli.sys.stdout", out
        ), mock.patch("nyaaview.cli.run_browser") as run_browser:
            cli.main(["--print", "--marker-file", str(self.tmp / "m"), "show"])

        run_browser.assert_not_called()
        self.assertIn("Printed Show", out.getvalue())
        self.assertNotIn("\033[", out.getvalue())

    def test_print_mode_uses_selected_theme_on_a_terminal(self) -> None:
        records = [ResultRecord(id="9", name="Printed Show")]
        out = _TerminalBuffer()
        with mock.patch("nyaaview.cli.fetch_once", new_callable=mock.AsyncMock, return_value=records), mock.patch(
            "nyaaview.cli.sys.stdout", out
        ):
            cli.main(["--print", "--theme", "ocean", "--marker-file", str(self.tmp / "m")])

        self.assertIn(OCEAN_THEME.table_header, out.getvalue())

    def test_print_mode_fetch_failure_exits(self) -> None:
        with mock.patch(
            "nyaaview.cli.fetch_once", new_callable=mock.AsyncMock, side_effect=NetworkError("offline")
        ):
            with self.assertRaises(SystemExit) as caught:
                cli.main(["--print", "--marker-file", str(self.tmp / "m")])
        self.assertIn("offline", str(caught.exception.code))


if __name__ == "__main__":
    unittest.main()
