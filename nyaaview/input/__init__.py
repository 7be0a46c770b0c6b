"""Input-layer public API for key decoding and mode handlers.

Exports are split between low-level terminal decoding (`read_key`) and the
browse/query handlers used by the session loop.
"""

from .reader import EOF_KEY, ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key
from .key_browse import BrowseKeyContext, handle_browse_key
from .key_query import handle_query_key
from .key_registry import KeyComboBinding, KeyComboRegistry

__all__ = [
    "read_key",
    "EOF_KEY",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "BrowseKeyContext",
    "KeyComboBinding",
    "KeyComboRegistry",
    "handle_browse_key",
    "handle_query_key",
]
