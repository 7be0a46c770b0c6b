"""ANSI-aware text measurement for fixed-width table cells.

Listing names mix CJK text and emoji glyphs, so widths are measured in
terminal columns rather than code points.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Control characters and combining marks consume no columns, and East Asian
    wide/fullwidth characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.category(ch) == "Cc":
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return display width of ``text`` ignoring ANSI escape sequences."""
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def fit_cell(text: str, width: int) -> str:
    """Clip or right-pad plain ``text`` to exactly ``width`` columns.

    Whitespace runs collapse to one space and control characters are dropped,
    so untrusted listing names cannot inject escape sequences.
    """
    if width <= 0:
        return ""
    single_line = "".join(ch for ch in " ".join(text.split()) if unicodedata.category(ch) != "Cc")
    clipped = clip_ansi_line(single_line, width)
    return clipped + " " * max(0, width - display_width(clipped))
