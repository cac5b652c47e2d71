from __future__ import annotations
import os

# /* ~~~ debounce window between the last edit and match resolution ~~~ */
DEBOUNCE_MS: int = int(os.environ.get("MENTION_ENGINE_DEBOUNCE_MS", "300"))

# how long a host should keep the "just accepted" highlight alive
FEEDBACK_MS: int = 500

# word delimiters for the fragment locator (nothing else splits a word)
DELIMITERS: frozenset[str] = frozenset(" \n\t\r")

# CJK unified ideographs; keywords containing one are scanned without word boundaries
CJK_RANGE: tuple[str, str] = ("\u4e00", "\u9fa5")

# memoize romanizations per distinct string
ROMANIZE_CACHE_SIZE: int = 4096

# category used when a host mapping carries none (or an unknown one)
DEFAULT_CATEGORY: str = "Character"

# Progress logging (set MENTION_ENGINE_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("MENTION_ENGINE_VERBOSE") == "1"
