from __future__ import annotations
from dataclasses import dataclass

from . import transliterate


@dataclass(frozen=True, slots=True)
class MatchKinds:
    """Which of the four match rules hold for one (fragment, keyword) pair."""
    exact_prefix: bool = False
    first_char: bool = False
    phonetic_prefix: bool = False
    first_char_phonetic: bool = False

    def __bool__(self) -> bool:
        return self.exact_prefix or self.first_char or self.phonetic_prefix or self.first_char_phonetic

    def labels(self) -> list[str]:
        return [name for name in self.__slots__ if getattr(self, name)]


_NONE = MatchKinds()


def match_kinds(fragment: str, keyword_name: str) -> MatchKinds:
    """
    Evaluate every match rule for a typed fragment against a keyword name.

    Rules (any one is a match, all comparisons case-insensitive):
      1) exact prefix:  name starts with the trimmed fragment and is longer
      2) first char:    first characters agree (the rest of the fragment is ignored)
      3) phonetic:      romanized name starts with the fragment
      4) first-char phonetic: romanized first character starts with the fragment
    """
    if not fragment or not keyword_name:
        return _NONE
    typed = fragment.strip()
    if not typed:
        return _NONE

    q = typed.lower()
    name = keyword_name.lower()
    return MatchKinds(
        exact_prefix=name.startswith(q) and name != q,
        first_char=name[0] == q[0],
        phonetic_prefix=transliterate.to_romanized(keyword_name).startswith(q),
        first_char_phonetic=transliterate.first_char_romanized(keyword_name).startswith(q),
    )


def matches(fragment: str, keyword_name: str) -> bool:
    return bool(match_kinds(fragment, keyword_name))
