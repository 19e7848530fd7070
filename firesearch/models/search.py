from pydantic import BaseModel
from typing import List

from google.cloud.firestore_v1 import FieldFilter

from firesearch.domain.search_schema import SearchType
from firesearch.services.make_searchable import build_searchable_fields
from firesearch.services.search_by import build_search_predicate

class Searchable(BaseModel):
    key: str
    value: str
    searchType: List[SearchType]

    def to_fields(self) -> dict:
        return build_searchable_fields(self.key, self.value, self.searchType)

class SearchRequest(BaseModel):
    key: str
    value: str
    searchType: SearchType
    strict: bool = True  # fullTextSearch 전용

    def to_filter(self) -> FieldFilter:
        return build_search_predicate(self.key, self.value, self.searchType, self.strict)
