from __future__ import annotations
from typing import List

from firesearch.domain.search_schema import GramResult, SearchableType


def generate_prefixes(text: str) -> GramResult:
    """Autocomplete tokens for ``text``.

    generate_prefixes("Hello World").tokens
    -> ["h", "he", "hel", "hell", "hello", "w", "wo", "wor", "worl", "world"]
    """
    return GramResult(type=SearchableType.PRE, tokens=word_prefixes(text))


def word_prefixes(text: str) -> List[str]:
    """Every leading prefix of every word, lowercased, in order of appearance.

    Words are split on any run of whitespace; leading/trailing whitespace produces
    no empty words. Prefixes shared between words are kept once per word.
    Empty or whitespace-only input returns [].
    """
    words = text.lower().split()
    prefixes: List[str] = []
    for word in words:
        prefixes.extend(word[:j] for j in range(1, len(word) + 1))
    return prefixes
