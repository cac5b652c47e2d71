from __future__ import annotations
import re
import unicodedata
from typing import Iterable, Iterator, List

from .config import CJK_RANGE, DELIMITERS
from .models import Keyword, Occurrence

_LO, _HI = CJK_RANGE


def has_cjk(s: str) -> bool:
    return any(_LO <= ch <= _HI for ch in s)


def _is_boundary(ch: str) -> bool:
    """Whitespace delimiter or any Unicode punctuation (categories P*)."""
    return ch in DELIMITERS or unicodedata.category(ch).startswith("P")


def _literal_hits(buffer: str, name: str) -> Iterator[int]:
    # step one char past each hit so overlapping occurrences are all reported
    i = buffer.find(name)
    while i != -1:
        yield i
        i = buffer.find(name, i + 1)


def _word_hits(buffer: str, name: str) -> Iterator[tuple[int, int]]:
    # regex search keeps offsets in the original buffer even when lower() would change lengths
    pat = re.compile(re.escape(name), re.IGNORECASE)
    n = len(buffer)
    pos = 0
    while pos <= n:
        m = pat.search(buffer, pos)
        if m is None:
            return
        start, end = m.span()
        before_ok = start == 0 or _is_boundary(buffer[start - 1])
        after_ok = end >= n or _is_boundary(buffer[end])
        if before_ok and after_ok:
            yield start, end
        pos = start + 1


def find_all_occurrences(buffer: str, keywords: Iterable[Keyword]) -> List[Occurrence]:
    """
    Every occurrence of every keyword in the buffer.

    CJK names match anywhere (no reliable word spacing); other names match
    case-insensitively but only as whole words, so "Ann" is not found inside
    "Annual". Each keyword is scanned on its own; overlaps between keywords are
    left for merge_spans(). The order of the returned list carries no meaning.
    """
    if not buffer:
        return []
    out: List[Occurrence] = []
    for kw in keywords:
        name = kw.name
        if not name:
            continue
        if has_cjk(name):
            out.extend(Occurrence(i, i + len(name), kw) for i in _literal_hits(buffer, name))
        else:
            out.extend(Occurrence(s, e, kw) for s, e in _word_hits(buffer, name))
    return out
