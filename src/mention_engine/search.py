from __future__ import annotations
import locale
import logging
from typing import Iterable, Optional, Union

from .matcher import matches
from .models import Fragment, Keyword, MatchResult
from . import transliterate

log = logging.getLogger(__name__)


def _collate(name: str) -> str:
    # locale-aware ordering; strxfrm rejects embedded NULs
    try:
        return locale.strxfrm(name)
    except ValueError:
        return name


def _rank_key(word: str):
    """
    Build the four-tier sort key for a fragment.

    Tiers (each consulted only on a tie of the previous one):
      1) name starts with the fragment
      2) first character agrees
      3) romanized name starts with the fragment
      4) shorter name, then locale order of the name
    """
    lw = word.lower()
    head = lw[:1]

    def key(k: Keyword) -> tuple:
        name = k.name
        lname = name.lower()
        return (
            not lname.startswith(lw),
            lname[:1] != head,
            not transliterate.to_romanized(name).startswith(lw),
            len(name),
            _collate(name),
        )

    return key


def ghost_suffix(word: str, name: str) -> str:
    """
    Remainder of ``name`` to display after the typed ``word``.

    Prefix matches keep the keyword's own casing for the rest; a first-character
    match shows everything after that character; a phonetic-only match slices
    by the typed length, which is only an approximation of the romanized span.
    """
    if not word or not name:
        return ""
    if name.lower().startswith(word.lower()):
        return name[len(word):]
    if name[0].lower() == word[0].lower():
        return name[1:]
    return name[min(len(word), len(name)):]


def find_matches(fragment: Union[Fragment, str, None], keywords: Iterable[Keyword]) -> Optional[MatchResult]:
    """
    Rank every keyword matching the fragment; None means "nothing to suggest".

    Accepts a Fragment (from locate_fragment) or a bare string, which is treated
    as a fragment starting at offset 0.
    """
    if fragment is None:
        return None
    if isinstance(fragment, str):
        fragment = Fragment(text=fragment, start=0, end=len(fragment))
    word = fragment.text.strip()
    if not word:
        return None

    hits = [k for k in keywords if matches(word, k.name)]
    if not hits:
        return None

    # sorted() is stable, so equal keys keep the caller's keyword order
    ranked = tuple(sorted(hits, key=_rank_key(word)))
    best = ranked[0]
    suffix = ghost_suffix(word, best.name)
    log.debug("fragment=%r matches=%d best=%r suffix=%r", word, len(ranked), best.name, suffix)
    return MatchResult(fragment=fragment, matches=ranked, ghost_suffix=suffix)
