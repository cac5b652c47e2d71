from __future__ import annotations
from typing import Optional

from .config import DELIMITERS
from .models import Fragment


def _clamp(cursor: int, n: int) -> int:
    if cursor < 0:
        return 0
    return n if cursor > n else cursor


def locate_fragment(buffer: str, cursor: int) -> Optional[Fragment]:
    """
    Return the word under the cursor, or None when there is none.

    A word is a maximal run of characters outside DELIMITERS (space, \\n, \\t, \\r).
    The cursor is clamped into [0, len(buffer)]. At offset 0 only the word
    starting at buffer[0] counts; elsewhere the word may extend on both sides
    of the cursor. A cursor sitting between two delimiters yields None.
    """
    if not buffer:
        return None
    n = len(buffer)
    cursor = _clamp(cursor, n)

    if cursor == 0:
        if buffer[0] in DELIMITERS:
            return None
        start = 0
    else:
        start = cursor
        while start > 0 and buffer[start - 1] not in DELIMITERS:
            start -= 1

    end = cursor
    while end < n and buffer[end] not in DELIMITERS:
        end += 1

    if start >= end:
        return None
    return Fragment(text=buffer[start:end], start=start, end=end)
