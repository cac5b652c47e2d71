from __future__ import annotations
from typing import Iterable, List, Optional, Protocol, Union

from .models import HighlightSpan, MatchResult, Occurrence, RenderSegment, SpanKind


class _Interval(Protocol):
    start: int
    end: int


def _overlaps(a: _Interval, b: _Interval) -> bool:
    # half-open intervals: containment, partial overlap and equality all count
    return a.start < b.end and b.start < a.end


def _admit(accepted: List[HighlightSpan], cand: HighlightSpan) -> None:
    """
    Add one candidate to the non-overlapping accepted list, in place.

    A keyword span may evict a single transient span it overlaps; anything
    else that collides is dropped, so the first span accepted wins.
    """
    hits = [i for i, acc in enumerate(accepted) if _overlaps(acc, cand)]
    if not hits:
        accepted.append(cand)
        return
    if len(hits) == 1:
        i = hits[0]
        if cand.kind is SpanKind.KEYWORD_MATCH and accepted[i].kind is SpanKind.TRANSIENT_FEEDBACK:
            accepted[i] = cand


def merge_spans(
    occurrences: Iterable[Union[Occurrence, HighlightSpan]],
    transient: Optional[HighlightSpan] = None,
    fragment: Optional[_Interval] = None,
) -> List[HighlightSpan]:
    """
    Turn raw keyword hits into a sorted, non-overlapping span set.

    occurrences : keyword hits (Occurrence or HighlightSpan); all become KEYWORD_MATCH.
    transient   : optional "just accepted" span owned by the host.
    fragment    : the word being typed; keyword hits touching it are not highlighted.
    """
    cands: List[HighlightSpan] = []
    for occ in occurrences:
        if occ.start >= occ.end:
            continue
        if fragment is not None and _overlaps(occ, fragment):
            continue
        cands.append(HighlightSpan(occ.start, occ.end, SpanKind.KEYWORD_MATCH))
    if transient is not None and transient.start < transient.end:
        cands.append(HighlightSpan(transient.start, transient.end, SpanKind.TRANSIENT_FEEDBACK))

    # on equal starts the transient span goes first so a keyword can replace it
    cands.sort(key=lambda s: (s.start, s.kind is SpanKind.KEYWORD_MATCH))

    accepted: List[HighlightSpan] = []
    for cand in cands:
        _admit(accepted, cand)
    accepted.sort(key=lambda s: s.start)
    return accepted


def render_segments(
    buffer: str,
    spans: Iterable[HighlightSpan],
    result: Optional[MatchResult] = None,
    dropdown_open: bool = False,
) -> List[RenderSegment]:
    """
    Split the buffer into plain/keyword/feedback runs for an overlay renderer.

    ``spans`` must come from merge_spans(). When a result is present and the
    dropdown is closed, its ghost suffix is emitted as a "ghost" segment right
    after the fragment; with the dropdown open no ghost text is shown.
    """
    n = len(buffer)
    cuts: List[tuple[int, int, str]] = []
    pos = 0
    for sp in spans:
        s, e = max(sp.start, pos), min(sp.end, n)
        if s >= e:
            continue
        if s > pos:
            cuts.append((pos, s, "plain"))
        cuts.append((s, e, sp.kind.value))
        pos = e
    if pos < n:
        cuts.append((pos, n, "plain"))

    ghost = result.ghost_suffix if (result is not None and not dropdown_open) else ""
    if not ghost:
        return [RenderSegment(buffer[s:e], k) for s, e, k in cuts]

    at = min(result.fragment.end, n)
    out: List[RenderSegment] = []
    placed = False
    for s, e, k in cuts:
        if not placed and s < at < e:
            out.append(RenderSegment(buffer[s:at], k))
            out.append(RenderSegment(ghost, "ghost"))
            out.append(RenderSegment(buffer[at:e], k))
            placed = True
            continue
        if not placed and at <= s:
            out.append(RenderSegment(ghost, "ghost"))
            placed = True
        out.append(RenderSegment(buffer[s:e], k))
    if not placed:
        out.append(RenderSegment(ghost, "ghost"))
    return out
