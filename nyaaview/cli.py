"""Command-line front door for nyaaview.

Parses CLI options, resolves config, logging, and the viewed-marker store.
Then dispatches into the interactive browser runtime or a one-shot print.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shutil
import sys
from pathlib import Path

from .api import NyaaClient
from .config import load_api_url, load_request_timeout, load_theme_name, load_view_url, save_theme_name
from .errors import FetchError
from .logs import configure_logging
from .marker import FileMarkerStore, MemoryMarkerStore, ViewedMarkerStore, default_marker_path, load_marker
from .navigation import MAX_PAGE, MIN_PAGE, QueryParams
from .render import build_table_lines
from .runtime import run_browser
from .runtime.app import fetch_once
from .ui_theme import UITheme, available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _page_number(value: str) -> int:
    """argparse type for page numbers within the browsable range."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < MIN_PAGE or parsed > MAX_PAGE:
        raise argparse.ArgumentTypeError(f"page must be between {MIN_PAGE} and {MAX_PAGE}")
    return parsed


def _positive_float(value: str) -> float:
    """argparse type for positive timeouts in seconds."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse torrent listings in the terminal and track what you have seen."
    )
    parser.add_argument("query", nargs="*", help="Initial search query. Defaults to the latest listings.")
    parser.add_argument("--page", type=_page_number, default=MIN_PAGE, help="Page to open first.")
    parser.add_argument("--api-url", default=None, help="Search API base URL.")
    parser.add_argument("--view-url", default=None, help="Listing detail URL prefix (id is appended).")
    parser.add_argument("--timeout", type=_positive_float, default=None, help="Request timeout in seconds.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--marker-file", type=Path, default=None, help="File holding the viewed watermark.")
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Keep the viewed watermark in memory only for this session.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print one page of results and exit without the interactive view.",
    )
    return parser


def _marker_store(args: argparse.Namespace) -> ViewedMarkerStore:
    file_store = FileMarkerStore(args.marker_file or default_marker_path())
    if args.no_persist:
        return MemoryMarkerStore(file_store.load())
    return file_store


def print_results(params: QueryParams, client: NyaaClient, last_viewed_id: int, theme: UITheme) -> None:
    """Fetch one page and write the table to stdout.

    Colors are dropped when stdout is not a terminal.
    """
    try:
        records = asyncio.run(fetch_once(params, client))
    except FetchError as exc:
        raise SystemExit(f"nyaaview: {exc}") from exc
    width = shutil.get_terminal_size((120, 24)).columns
    if not sys.stdout.isatty():
        theme = resolve_theme(None, no_color=True)
    lines = build_table_lines(records, None, 0, max(1, len(records)), width, last_viewed_id, theme)
    sys.stdout.write("\n".join(lines) + "\n")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the browser."""
    args = build_parser().parse_args(argv)

    configure_logging(args.log_file, logging.DEBUG if args.debug else logging.INFO)

    if args.theme is not None:
        save_theme_name(args.theme)
    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)

    params = QueryParams(page=args.page, query=" ".join(args.query))
    client = NyaaClient(
        base_url=args.api_url or load_api_url(),
        timeout=args.timeout or load_request_timeout(),
    )
    store = _marker_store(args)

    if args.print_only:
        print_results(params, client, load_marker(store), theme)
        return

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        asyncio.run(client.aclose())
        raise SystemExit("nyaaview needs an interactive terminal; use --print for plain output.")

    run_browser(params, client, store, view_url=args.view_url or load_view_url(), theme=theme)


if __name__ == "__main__":
    main()
