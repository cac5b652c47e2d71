# src/mention_engine/models.py
"""
Data models for the mention engine.

These containers carry plain data between the host and the engine:

- Keyword: a known entity the user may mention (character, location, item).
- Fragment: the word under the cursor.
- MatchResult: ranked completions for a fragment plus the ghost suffix.
- Occurrence / HighlightSpan: keyword hits in the buffer and the merged,
  render-ready spans derived from them.
- RenderSegment / AcceptResult: convenience outputs for hosts.

They hold no business logic; locating, matching, scanning and merging live in
their own modules so each stays a pure function over these values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from . import config as CFG


class KeywordCategory(str, Enum):
    CHARACTER = "Character"
    LOCATION = "Location"
    ITEM = "Item"

    @classmethod
    def parse(cls, value: Any) -> "KeywordCategory":
        """Lenient lookup by value or member name; unknown values fall back to the default."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value.strip().lower() in (member.value.lower(), member.name.lower()):
                    return member
        return cls(CFG.DEFAULT_CATEGORY)


class SpanKind(str, Enum):
    KEYWORD_MATCH = "keyword"
    TRANSIENT_FEEDBACK = "feedback"


@dataclass(frozen=True, slots=True)
class Keyword:
    """
    A known entity that can be mentioned in the text.

    Attributes
    ----------
    name : str
        Display name, matched literally. Identity is the exact,
        case-sensitive name. An empty name is allowed but never matches.
    category : KeywordCategory
        Character, Location or Item.
    description : Optional[str]
        Free-form notes (visual traits etc.); not used for matching.
    """
    name: str
    category: KeywordCategory = KeywordCategory.CHARACTER
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Keyword":
        if not isinstance(data, Mapping):
            raise ValueError(f"keyword entry must be a mapping, got {type(data).__name__}")
        name = data.get("name")
        if not isinstance(name, str):
            raise ValueError(f"keyword entry needs a string 'name': {data!r}")
        desc = data.get("description", data.get("visual_traits"))
        return cls(
            name=name,
            category=KeywordCategory.parse(data.get("category")),
            description=desc if isinstance(desc, str) else None,
        )

    def to_dict(self) -> dict:
        out = {"name": self.name, "category": self.category.value}
        if self.description is not None:
            out["description"] = self.description
        return out


@dataclass(frozen=True, slots=True)
class Fragment:
    """
    The delimiter-free token containing the cursor.

    ``text == buffer[start:end]`` and ``0 <= start <= end <= len(buffer)``.
    """
    text: str
    start: int
    end: int

    def to_dict(self) -> dict:
        return {"text": self.text, "start": self.start, "end": self.end}


@dataclass(frozen=True, slots=True)
class MatchResult:
    """
    The result returned by find_matches().

    Attributes
    ----------
    fragment : Fragment
        The fragment the matches were computed for.
    matches : Tuple[Keyword, ...]
        Every matching keyword, ranked; never empty.
    ghost_suffix : str
        Remainder of best_match.name to show after the fragment.
    """
    fragment: Fragment
    matches: Tuple[Keyword, ...]
    ghost_suffix: str

    @property
    def best_match(self) -> Keyword:
        return self.matches[0]

    def to_dict(self) -> dict:
        return {
            "fragment": self.fragment.to_dict(),
            "matches": [k.to_dict() for k in self.matches],
            "best_match": self.best_match.to_dict(),
            "ghost_suffix": self.ghost_suffix,
        }


@dataclass(frozen=True, slots=True)
class Occurrence:
    """One literal hit of a keyword in the buffer: ``buffer[start:end]``."""
    start: int
    end: int
    keyword: Keyword


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    start: int
    end: int
    kind: SpanKind = SpanKind.KEYWORD_MATCH

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "kind": self.kind.value}


@dataclass(frozen=True, slots=True)
class RenderSegment:
    """A run of output text; ``kind`` is "plain", "keyword", "feedback" or "ghost"."""
    text: str
    kind: str = "plain"


@dataclass(frozen=True, slots=True)
class AcceptResult:
    buffer: str
    cursor: int
    feedback: HighlightSpan
