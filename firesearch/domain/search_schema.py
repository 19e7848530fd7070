"""Shared naming scheme for searchable index fields.

Both the index side (make_searchable) and the query side (search_by) build field
names through this module only, so a field written as ``fts_tri_title`` is the
same field a query for ``title`` looks at.

    fts_tri_<key>   trigram tokens (full text search)
    ac_pre_<key>    lowercased word prefixes (autocomplete)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from google.cloud.firestore_v1.field_path import FieldPath


class SearchableType(str, Enum):
    PRE = "pre"
    BI = "bi"
    TRI = "tri"


class SearchType(str, Enum):
    FULL_TEXT_SEARCH = "fullTextSearch"
    AUTO_COMPLETE = "autoComplete"


# mode prefix per search type
FULL_TEXT_PREFIX = "fts"
AUTO_COMPLETE_PREFIX = "ac"

# Firestore array operators
ARRAY_CONTAINS = "array_contains"
ARRAY_CONTAINS_ANY = "array_contains_any"


@dataclass(frozen=True)
class GramResult:
    type: SearchableType
    tokens: List[str] = field(default_factory=list)


def field_name(mode_prefix: str, gram_type: SearchableType, key: str) -> str:
    return mode_prefix + "_" + gram_type.value + "_" + key


def query_path(name: str) -> str:
    """Field path for querying a field stored under the literal ``name``.

    Writes use set(..., merge=True), which keeps ``name`` as one field even when the key
    contains '.'; query paths must quote such names (``ac_pre_a.b`` -> ```ac_pre_a.b```).
    """
    return FieldPath(name).to_api_repr()


def full_text_field(key: str) -> str:
    return field_name(FULL_TEXT_PREFIX, SearchableType.TRI, key)


def auto_complete_field(key: str) -> str:
    return field_name(AUTO_COMPLETE_PREFIX, SearchableType.PRE, key)
