"""Sliding-window character n-grams for approximate substring search in Firestore.

Indexing writes the trigrams of a text value into an array field (fts_tri_<key>);
queries rebuild the trigrams of the needle and match them with array_contains /
array_contains_any.

No normalization happens here: case, whitespace and punctuation are kept, and
every index of the Python string counts as one unit. Windows are counted in code
points, so a character outside the Basic Multilingual Plane (e.g. an emoji) is one
unit here where a UTF-16 based indexer would see two; tokens for such text differ
from an index built with UTF-16 windows.
"""
from __future__ import annotations
from typing import List

from firesearch.domain.search_schema import GramResult, SearchableType


def generate_grams(n: int, text: str) -> GramResult:
    """Generate bigrams (n=2) or trigrams (n=3) from ``text``.

    generate_grams(2, "hello") -> GramResult(type=BI, tokens=["he", "el", "ll", "lo"])

    Text shorter than ``n`` yields no tokens. Raises ValueError for any other n.
    """
    if n != 2 and n != 3:
        raise ValueError("Value of n must be either 2 or 3")

    gram_type = SearchableType.BI if n == 2 else SearchableType.TRI
    tokens = create_trigrams(text) if gram_type is SearchableType.TRI else create_bigrams(text)
    return GramResult(type=gram_type, tokens=tokens)


def create_bigrams(text: str) -> List[str]:
    """create_bigrams("abcd") -> ["ab", "bc", "cd"]"""
    if len(text) < 2:
        return []
    return [text[i:i + 2] for i in range(len(text) - 1)]


def create_trigrams(text: str) -> List[str]:
    """create_trigrams("abcde") -> ["abc", "bcd", "cde"]"""
    if len(text) < 3:
        return []
    return [text[i:i + 3] for i in range(len(text) - 2)]
