"""
Tone-free romanization used for phonetic prefix matching.

CJK text is converted with pypinyin (NORMAL style: no tone marks or digits);
anything pypinyin does not recognise is passed through unchanged, so Latin
names simply come back lower-cased. Both helpers swallow transliteration
failures and fall back to plain lower-casing; callers never see an exception.
"""
from __future__ import annotations

import logging
import re
from functools import lru_cache

from pypinyin import Style, lazy_pinyin

from .config import ROMANIZE_CACHE_SIZE

log = logging.getLogger(__name__)

_WS = re.compile(r"\s+")


# pypinyin lookups are the hot path; cached per distinct string
@lru_cache(maxsize=ROMANIZE_CACHE_SIZE)
def to_romanized(text: str) -> str:
    """Whole-string romanization: lower-case, no tones, no whitespace."""
    if not text:
        return ""
    try:
        parts = lazy_pinyin(text, style=Style.NORMAL, errors="default")
        return _WS.sub("", "".join(parts)).lower()
    except Exception as exc:  # noqa: BLE001
        log.debug("romanization failed for %r: %s", text, exc)
        return text.lower()


@lru_cache(maxsize=ROMANIZE_CACHE_SIZE)
def first_char_romanized(text: str) -> str:
    """Romanization of the first character only ("沈知夏" -> "shen")."""
    if not text:
        return ""
    first = text[0]
    try:
        parts = lazy_pinyin(first, style=Style.NORMAL, errors="default")
        return _WS.sub("", "".join(parts)).lower()
    except Exception as exc:  # noqa: BLE001
        log.debug("romanization failed for %r: %s", first, exc)
        return first.lower()
