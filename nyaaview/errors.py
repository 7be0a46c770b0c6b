"""Error taxonomy shared by the fetch, persistence, and selection layers.

Parse failures are not represented here: numeric parsing always falls back
to a safe default instead of raising.
"""

from __future__ import annotations


class NyaaviewError(Exception):
    """Base class for all errors raised by nyaaview."""


class FetchError(NyaaviewError):
    """Search request could not produce a result set."""


class NetworkError(FetchError):
    """Transport failure or non-success HTTP status."""


class DecodeError(FetchError):
    """Response body was not a JSON list of listing objects."""


class MarkerWriteError(NyaaviewError):
    """Viewed watermark could not be written to its storage location."""


class OutOfRangeError(NyaaviewError, IndexError):
    """Record index lookup outside the current result set."""


__all__ = [
    "NyaaviewError",
    "FetchError",
    "NetworkError",
    "DecodeError",
    "MarkerWriteError",
    "OutOfRangeError",
]
