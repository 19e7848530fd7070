"""Build the searchable array fields that get merged into a stored document.

    build_searchable_fields("title", "test", ["autoComplete", "fullTextSearch"])
    -> {"fts_tri_title": ["tes", "est"], "ac_pre_title": ["t", "te", "tes", "test"]}

Unknown search types are ignored so callers can pass a wider mode set.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from firesearch.domain.search_schema import (
    AUTO_COMPLETE_PREFIX,
    FULL_TEXT_PREFIX,
    SearchType,
    field_name,
)
from firesearch.services.ngrams import generate_grams
from firesearch.services.prefix import generate_prefixes
from firesearch.scripts.logging_config import get_logger

logger = get_logger("make_searchable")


def build_searchable_fields(key: str, value: str, search_types: Iterable[str]) -> Dict[str, List[str]]:
    modes = {getattr(t, "value", t) for t in search_types}
    fields: Dict[str, List[str]] = {}

    if SearchType.FULL_TEXT_SEARCH.value in modes:
        res = generate_grams(3, value)
        fields[field_name(FULL_TEXT_PREFIX, res.type, key)] = res.tokens

    if SearchType.AUTO_COMPLETE.value in modes:
        res = generate_prefixes(value)
        fields[field_name(AUTO_COMPLETE_PREFIX, res.type, key)] = res.tokens

    logger.debug("make_searchable key=%s modes=%s fields=%s", key, sorted(modes, key=str), list(fields))
    return fields


def build_searchable_fields_many(searchables) -> Dict[str, List[str]]:
    """Merge the fields of several Searchable requests (one per source key)."""
    fields: Dict[str, List[str]] = {}
    for s in searchables:
        fields.update(build_searchable_fields(s.key, s.value, s.searchType))
    return fields


def ensure_searchable(doc: Dict, source_field: str, search_types: Iterable[str], key: Optional[str] = None) -> Dict:
    """Add searchable fields for ``doc[source_field]`` in place; non-string sources are left alone."""
    txt = doc.get(source_field)
    if isinstance(txt, str):
        doc.update(build_searchable_fields(key or source_field, txt, search_types))
    return doc
