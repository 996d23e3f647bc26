"""Answer normalization for comparison."""

from __future__ import annotations

import re

# Apostrophes are kept so contractions ("don't", "it's") survive.
_PUNCTUATION = re.compile(r'[.,!?;:"\-()\[\]{}]')
_WHITESPACE = re.compile(r"\s+")


def normalize_answer(text: str) -> str:
    """Normalize an answer for comparison: lowercase, drop punctuation, collapse whitespace."""
    text = text.lower()
    text = _PUNCTUATION.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def word_count(text: str) -> int:
    """Count whitespace-separated words in the raw answer."""
    return len(text.split())

