"""Word counts and reading time estimates for article text."""

from __future__ import annotations

import math
import re
from enum import StrEnum

_TAG_RE = re.compile(r"<[^>]+>")
_NON_WORD_RE = re.compile(r"[^\w\s'-]")


class ReadingSpeed(StrEnum):
    """Reader pace preference."""

    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


_WORDS_PER_MINUTE = {
    ReadingSpeed.SLOW: 180,
    ReadingSpeed.NORMAL: 220,
    ReadingSpeed.FAST: 260,
}


def words_per_minute(speed: ReadingSpeed | str) -> int:
    """Reading rate for a pace preference; unknown values read at normal pace."""
    try:
        return _WORDS_PER_MINUTE[ReadingSpeed(speed)]
    except ValueError:
        return _WORDS_PER_MINUTE[ReadingSpeed.NORMAL]


def get_word_count(text: str) -> int:
    """Count words after dropping HTML tags and punctuation."""
    if not text:
        return 0
    cleaned = _NON_WORD_RE.sub(" ", _TAG_RE.sub(" ", text))
    return len(cleaned.split())


def estimate_reading_time(text: str, words_per_minute: int) -> int:
    """Whole minutes needed to read *text*, at least 1 for non-empty text."""
    if not text:
        return 0
    word_count = get_word_count(text)
    if word_count == 0 or not words_per_minute:
        return 0
    return max(1, math.ceil(word_count / words_per_minute))
