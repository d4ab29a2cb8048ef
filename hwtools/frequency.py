"""Find the most frequent words in a text."""

from __future__ import annotations

import re
from collections import Counter

MAX_TOP_COUNT = 10

_SEPARATOR = re.compile(r"[\s'\"!]+", re.ASCII)
_SKIP_WORDS = frozenset({"", "-"})


def top10(text: str) -> list[str]:
    """Return up to ten of the most frequent words, most frequent first.

    Words are compared case-insensitively; lone dashes are ignored.
    """
    counts = Counter(
        word.lower() for word in _SEPARATOR.split(text) if word not in _SKIP_WORDS
    )
    return [word for word, _ in counts.most_common(MAX_TOP_COUNT)]