# mention_engine/engine.py
from __future__ import annotations

import json
import logging
import os
from typing import Any, Iterable, List, Optional

from . import config as CFG
from .fragment import locate_fragment
from .models import AcceptResult, Fragment, HighlightSpan, Keyword, MatchResult, SpanKind
from .scanner import find_all_occurrences
from .search import find_matches
from .spans import merge_spans
from .trigger import Scheduler, TriggerController, ReadState, OnResolved

log = logging.getLogger(__name__)


def parse_keywords(items: Iterable[Any]) -> List[Keyword]:
    """Build keywords from host data: mappings, bare names or Keyword objects."""
    out: List[Keyword] = []
    for it in items:
        if isinstance(it, Keyword):
            out.append(it)
        elif isinstance(it, str):
            out.append(Keyword(name=it))
        else:
            out.append(Keyword.from_dict(it))
    return out


def load_keywords(path: str) -> List[Keyword]:
    """Read a JSON list of keyword mappings (``{"name", "category", "description"}``)."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("keywords", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of keywords")
    return parse_keywords(data)


def accept_completion(buffer: str, result: MatchResult, keyword: Optional[Keyword] = None) -> AcceptResult:
    """
    Replace the fragment with ``keyword.name + " "`` (best match by default).

    Returns the new buffer, the cursor placed after the inserted space, and a
    transient feedback span over the inserted name for the host to display
    briefly (see config.FEEDBACK_MS).
    """
    kw = keyword or result.best_match
    if keyword is not None and keyword not in result.matches:
        raise ValueError(f"{keyword.name!r} is not among the offered matches")
    frag = result.fragment
    new_buffer = f"{buffer[:frag.start]}{kw.name} {buffer[frag.end:]}"
    end = frag.start + len(kw.name)
    return AcceptResult(
        buffer=new_buffer,
        cursor=end + 1,
        feedback=HighlightSpan(frag.start, end, SpanKind.TRANSIENT_FEEDBACK),
    )


class Engine:
    """
    Thin orchestration layer over the pure matching functions.

    Holds a keyword snapshot so hosts (CLI, Flask) can ask:
      * locate(buffer, cursor):      word under the cursor
      * complete(buffer, cursor):    ranked completions + ghost suffix
      * highlight(buffer, ...):      merged keyword/feedback spans
      * accept(buffer, result, ...): splice a completion in
      * controller(...):             a debounced TriggerController bound to the keywords
    """

    def __init__(self, keywords: Iterable[Any] = ()) -> None:
        self.keywords: List[Keyword] = []
        self.set_keywords(keywords)

    def set_keywords(self, keywords: Iterable[Any]) -> None:
        self.keywords = parse_keywords(keywords)
        log.info("Engine keywords updated: count=%d", len(self.keywords))

    def locate(self, buffer: str, cursor: int) -> Optional[Fragment]:
        return locate_fragment(buffer, cursor)

    def complete(self, buffer: str, cursor: int, keywords: Optional[Iterable[Any]] = None) -> Optional[MatchResult]:
        kws = parse_keywords(keywords) if keywords is not None else self.keywords
        frag = locate_fragment(buffer, cursor)
        if frag is None:
            return None
        return find_matches(frag, kws)

    def highlight(
        self,
        buffer: str,
        *,
        cursor: Optional[int] = None,
        feedback: Optional[HighlightSpan] = None,
        keywords: Optional[Iterable[Any]] = None,
    ) -> List[HighlightSpan]:
        """
        Spans to overlay on the buffer. When ``cursor`` sits on a word that has
        completions, that word is left unhighlighted; a feedback span is clipped
        to the buffer.
        """
        kws = parse_keywords(keywords) if keywords is not None else self.keywords
        result = self.complete(buffer, cursor, kws) if cursor is not None else None
        frag = result.fragment if result is not None else None
        if feedback is not None:
            n = len(buffer)
            feedback = HighlightSpan(
                min(max(feedback.start, 0), n), min(max(feedback.end, 0), n), SpanKind.TRANSIENT_FEEDBACK
            )
        return merge_spans(find_all_occurrences(buffer, kws), feedback, frag)

    def accept(self, buffer: str, result: MatchResult, keyword: Optional[Keyword] = None) -> AcceptResult:
        return accept_completion(buffer, result, keyword)

    def controller(
        self,
        *,
        delay_ms: int = CFG.DEBOUNCE_MS,
        scheduler: Optional[Scheduler] = None,
        read_state: Optional[ReadState] = None,
        on_resolved: Optional[OnResolved] = None,
    ) -> TriggerController:
        return TriggerController(
            self.keywords,
            delay_ms=delay_ms,
            scheduler=scheduler,
            read_state=read_state,
            on_resolved=on_resolved,
        )
