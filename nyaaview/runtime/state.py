from __future__ import annotations

from dataclasses import dataclass, field

from ..navigation import QueryParams
from ..records import ResultSet

BROWSE_MODE = "browse"
QUERY_MODE = "query"


@dataclass
class SessionState:
    params: QueryParams = field(default_factory=QueryParams)
    results: ResultSet = field(default_factory=ResultSet)
    selected_idx: int | None = None
    count_buffer: str = ""
    last_viewed_id: int = 0
    mode: str = BROWSE_MODE
    query_buffer: str = ""
    show_help: bool = False
    table_start: int = 0
    status_message: str = ""
    status_is_error: bool = False
    dirty: bool = True
    skip_next_lf: bool = False
