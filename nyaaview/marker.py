"""Viewed-watermark persistence.

The watermark is a single decimal integer kept in a small text file.
A missing or corrupt file loads as "nothing viewed yet".
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from platformdirs import user_data_dir

from .errors import MarkerWriteError
from .records import parse_unsigned

logger = logging.getLogger(__name__)

APP_NAME = "nyaaview"
MARKER_FILENAME = "last_viewed"
DEFAULT_MARKER_PATH = Path(user_data_dir(APP_NAME, appauthor=False)) / MARKER_FILENAME
LEGACY_MARKER_PATH = Path.home() / ".nyaa"


class ViewedMarkerStore(Protocol):
    def load(self) -> int | None: ...

    def persist(self, value: int) -> None: ...


def default_marker_path() -> Path:
    """Return preferred marker path, falling back to the legacy ``~/.nyaa`` file."""
    if DEFAULT_MARKER_PATH.exists():
        return DEFAULT_MARKER_PATH
    if LEGACY_MARKER_PATH.exists():
        return LEGACY_MARKER_PATH
    return DEFAULT_MARKER_PATH


class FileMarkerStore:
    """Marker store backed by one text file holding the decimal watermark."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> int | None:
        """Read the watermark, returning ``None`` when absent or unparseable."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError:
            return None
        except ValueError:
            logger.warning("ignoring undecodable viewed marker in %s", self.path)
            return None
        stripped = text.strip()
        if not stripped.isdigit():
            logger.warning("ignoring unparseable viewed marker in %s", self.path)
            return None
        return parse_unsigned(stripped)

    def persist(self, value: int) -> None:
        """Overwrite the stored watermark with ``value``.

        Raises ``MarkerWriteError`` when the directory or file cannot be
        created or written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(f"{max(0, value)}\n", encoding="utf-8")
        except OSError as exc:
            raise MarkerWriteError(f"cannot write viewed marker to {self.path}: {exc}") from exc
        logger.info("viewed marker set to %d in %s", value, self.path)


class MemoryMarkerStore:
    """Marker store that keeps the watermark in process memory only."""

    def __init__(self, value: int | None = None) -> None:
        self.value = value
        self.writes: list[int] = []

    def load(self) -> int | None:
        return self.value

    def persist(self, value: int) -> None:
        self.value = value
        self.writes.append(value)


def load_marker(store: ViewedMarkerStore) -> int:
    """Return the stored watermark, ``0`` when there is none."""
    value = store.load()
    return 0 if value is None else value


__all__ = [
    "DEFAULT_MARKER_PATH",
    "LEGACY_MARKER_PATH",
    "FileMarkerStore",
    "MemoryMarkerStore",
    "ViewedMarkerStore",
    "default_marker_path",
    "load_marker",
]
