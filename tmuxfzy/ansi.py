"""Cell-width measurement for styled picker rows.

Rows carry SGR color escapes; widths and clipping count only the characters
a terminal actually draws, with wide CJK glyphs taking two cells.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"(\x1b\[[0-9;?]*[ -/]*[@-~])")


def cell_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return how many terminal cells ``text`` occupies."""
    return sum(cell_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` down to ``max_cols`` cells, keeping escapes seen before the cut."""
    if max_cols <= 0:
        return ""
    kept: list[str] = []
    used = 0
    for part in ANSI_ESCAPE_RE.split(text):
        if ANSI_ESCAPE_RE.fullmatch(part):
            kept.append(part)
            continue
        for ch in part:
            width = cell_width(ch)
            if used + width > max_cols:
                return "".join(kept)
            kept.append(ch)
            used += width
    return "".join(kept)
