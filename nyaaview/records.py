"""Listing records and the ordered result set that holds one fetched page.

Records are immutable; a new fetch replaces the whole set.
Selection clamping is the caller's job after every ``replace``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, fields

from .errors import DecodeError, OutOfRangeError


def parse_unsigned(text: str, default: int = 0) -> int:
    """Parse decimal ``text`` as a non-negative integer, or return ``default``."""
    stripped = text.strip()
    if not stripped.isdigit():
        return default
    try:
        return int(stripped)
    except ValueError:
        return default


@dataclass(frozen=True)
class ResultRecord:
    """One listing row exactly as the search API reports it."""

    id: str
    name: str
    date: str = ""
    filesize: str = ""
    magnet: str = ""
    torrent: str = ""
    seeders: str = ""
    leechers: str = ""
    hash: str = ""
    category: str = ""
    sub_category: str = ""
    completed: str = ""
    status: str = ""

    @classmethod
    def from_payload(cls, payload: object) -> ResultRecord:
        """Build a record from one decoded JSON object.

        Missing keys become empty strings and scalar values are stringified;
        anything that is not a JSON object is a ``DecodeError``.
        """
        if not isinstance(payload, Mapping):
            raise DecodeError(f"expected listing object, got {type(payload).__name__}")
        values: dict[str, str] = {}
        for field in fields(cls):
            raw = payload.get(field.name, "")
            values[field.name] = "" if raw is None else str(raw)
        return cls(**values)

    def numeric_id(self) -> int:
        """Return ``id`` as an integer, ``0`` when it is not numeric."""
        return parse_unsigned(self.id)

    def is_viewed(self, last_viewed_id: int) -> bool:
        return self.numeric_id() <= last_viewed_id


class ResultSet:
    """Ordered records of the current page, in relevance order."""

    def __init__(self, records: Iterable[ResultRecord] = ()) -> None:
        self._records: tuple[ResultRecord, ...] = tuple(records)

    def replace(self, records: Iterable[ResultRecord]) -> None:
        self._records = tuple(records)

    def get(self, index: int) -> ResultRecord:
        """Return the record at ``index``; raise ``OutOfRangeError`` otherwise."""
        if not self._records:
            raise OutOfRangeError("result set is empty")
        if index < 0 or index >= len(self._records):
            raise OutOfRangeError(f"index {index} outside result set of {len(self._records)}")
        return self._records[index]

    def last_index(self) -> int | None:
        if not self._records:
            return None
        return len(self._records) - 1

    @property
    def records(self) -> tuple[ResultRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def __iter__(self) -> Iterator[ResultRecord]:
        return iter(self._records)


def decode_records(payload: object) -> list[ResultRecord]:
    """Decode a JSON response body (a list of listing objects) into records."""
    if not isinstance(payload, list):
        raise DecodeError(f"expected a JSON list of listings, got {type(payload).__name__}")
    return [ResultRecord.from_payload(item) for item in payload]


__all__ = [
    "ResultRecord",
    "ResultSet",
    "decode_records",
    "parse_unsigned",
]
