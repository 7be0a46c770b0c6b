"""Hand URLs to the operating system's default handler.

Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from .records import ResultRecord

logger = logging.getLogger(__name__)


def _opener_commands(url: str) -> list[list[str]]:
    """Return candidate commands that open ``url`` on this platform."""
    if sys.platform == "darwin":
        return [["open", url]]
    if os.name == "nt":
        return [["cmd", "/c", "start", "", url]]
    return [["xdg-open", url], ["gio", "open", url]]


def open_url(url: str) -> str | None:
    """Open ``url`` without waiting for the handler; return an error or ``None``."""
    if not url:
        return "Nothing to open: link is empty."
    for command in _opener_commands(url):
        if shutil.which(command[0]) is None:
            continue
        try:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            logger.warning("failed to run %s: %s", command[0], exc)
            continue
        logger.info("opened %s via %s", url, command[0])
        return None
    return f"Cannot open {url}: no URL opener found."


def listing_url(view_url: str, record: ResultRecord) -> str:
    """Return the detail-page URL for ``record``."""
    return f"{view_url.rstrip('/')}/{record.id}"
