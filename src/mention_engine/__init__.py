"""
Mention Engine Module

Live keyword mention and autocomplete annotation for plain-text editors. Given
the text buffer, a cursor offset and a set of known keywords (characters,
locations, items), the engine finds the word being typed, proposes ranked
completions (direct prefix, first character, pinyin prefix, first-character
pinyin), computes the ghost suffix to display, and scans the whole buffer for
keyword occurrences to highlight.

The module is designed with a clean separation of concerns:
- Fragment location and transliteration
- Matching, ranking and ghost suffix computation
- Occurrence scanning and span merging
- Debounced triggering for interactive hosts

Main Functions:
    locate_fragment(buffer, cursor): word under the cursor
    find_matches(fragment, keywords): ranked completions for that word
    find_all_occurrences(buffer, keywords): every keyword hit in the buffer
    merge_spans(occurrences, transient, fragment): render-ready highlight spans

Example Usage:
    from mention_engine import Keyword, locate_fragment, find_matches

    keywords = [Keyword("Leah"), Keyword("Leo"), Keyword("沈知夏")]
    frag = locate_fragment("go to Le", 8)
    result = find_matches(frag, keywords)
    print(result.best_match.name, result.ghost_suffix)   # Leo o
"""

# src/mention_engine/__init__.py
from .engine import Engine, accept_completion, load_keywords, parse_keywords
from .fragment import locate_fragment
from .matcher import match_kinds, matches
from .models import (
    AcceptResult,
    Fragment,
    HighlightSpan,
    Keyword,
    KeywordCategory,
    MatchResult,
    Occurrence,
    RenderSegment,
    SpanKind,
)
from .scanner import find_all_occurrences
from .search import find_matches
from .spans import merge_spans, render_segments
from .transliterate import first_char_romanized, to_romanized
from .trigger import ThreadingScheduler, TkScheduler, TriggerController, TriggerState

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "accept_completion",
    "load_keywords",
    "parse_keywords",
    "locate_fragment",
    "match_kinds",
    "matches",
    "AcceptResult",
    "Fragment",
    "HighlightSpan",
    "Keyword",
    "KeywordCategory",
    "MatchResult",
    "Occurrence",
    "RenderSegment",
    "SpanKind",
    "find_all_occurrences",
    "find_matches",
    "merge_spans",
    "render_segments",
    "first_char_romanized",
    "to_romanized",
    "ThreadingScheduler",
    "TkScheduler",
    "TriggerController",
    "TriggerState",
]
