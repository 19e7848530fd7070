from __future__ import annotations
from typing import Union

from google.cloud.firestore_v1 import FieldFilter

from firesearch.domain.search_schema import (
    ARRAY_CONTAINS,
    ARRAY_CONTAINS_ANY,
    SearchType,
    auto_complete_field,
    full_text_field,
    query_path,
)
from firesearch.services.ngrams import create_trigrams
from firesearch.scripts.logging_config import get_logger

logger = get_logger("search_by")


def build_search_predicate(
    key: str,
    value: str,
    search_type: Union[SearchType, str],
    strict: bool = True,
) -> FieldFilter:
    """Build a Firestore FieldFilter against the searchable field of ``key``.

    fullTextSearch:
      field ``fts_tri_<key>``, value = trigrams of ``value``.
      strict=True  -> array_contains
      strict=False -> array_contains_any (any trigram overlaps)
      Only trigram fields are queried; bigram fields are never targeted.

    anything else (autoComplete):
      field ``ac_pre_<key>``, array_contains with the raw ``value``. ``strict`` is ignored
      and nothing is lowercased or trimmed, so pass the value normalized the same way
      it was indexed.

    Keys containing "." are quoted in the field path (see query_path) so they match
    the literal field names written by set(..., merge=True).

    Usage:
      col.where(filter=build_search_predicate("name", "alice", "fullTextSearch", strict=False))
    """
    if search_type == SearchType.FULL_TEXT_SEARCH:
        matches = create_trigrams(value)
        op = ARRAY_CONTAINS if strict else ARRAY_CONTAINS_ANY
        logger.debug("search_by field=%s op=%s tokens=%d", full_text_field(key), op, len(matches))
        return FieldFilter(query_path(full_text_field(key)), op, matches)
    return FieldFilter(query_path(auto_complete_field(key)), ARRAY_CONTAINS, value)
