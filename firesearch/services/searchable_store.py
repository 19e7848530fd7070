from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import json

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1 import FieldFilter

from config import settings
from firesearch.domain.search_schema import ARRAY_CONTAINS_ANY
from firesearch.models.search import SearchRequest
from firesearch.services.make_searchable import build_searchable_fields
from firesearch.scripts.logging_config import get_logger

logger = get_logger("searchable_store")

_db = None


def init_firebase() -> bool:
    """Initialize firebase_admin once from settings. Returns False when credentials are missing or broken."""
    if firebase_admin._apps:
        return True
    cred_obj = None
    try:
        if settings.FIREBASE_CREDENTIALS_JSON_STRING:
            cred_obj = credentials.Certificate(json.loads(settings.FIREBASE_CREDENTIALS_JSON_STRING))
            logger.info("Firebase credentials loaded from FIREBASE_CREDENTIALS_JSON_STRING.")
        elif settings.GOOGLE_APPLICATION_CREDENTIALS:
            cred_obj = credentials.Certificate(settings.GOOGLE_APPLICATION_CREDENTIALS)
            logger.info("Firebase credentials loaded from GOOGLE_APPLICATION_CREDENTIALS file.")

        if not cred_obj:
            logger.warning("Firebase credentials not found. Firestore features will be disabled.")
            return False
        firebase_admin.initialize_app(cred_obj)
        logger.info("Firebase initialized successfully.")
        return True
    except Exception as e:
        logger.exception("Firebase initialization failed: %s", e)
        return False


def get_db():
    global _db
    if _db is None:
        _db = firestore.client()
    return _db


def write_searchable(collection: str, doc_id: str, key: str, value: str, search_types: Iterable[str]) -> Dict[str, List[str]]:
    """Merge the searchable fields of ``value`` into ``collection/doc_id``; returns the written fields."""
    fields = build_searchable_fields(key, value, search_types)
    if not fields:
        logger.info("firestore.write skipped doc=%s/%s key=%s (no known search type)", collection, doc_id, key)
        return fields
    get_db().collection(collection).document(doc_id).set(fields, merge=True)
    logger.info("firestore.write op=merge doc=%s/%s fields=%s", collection, doc_id, list(fields))
    return fields


def _cap_any_values(flt: FieldFilter) -> FieldFilter:
    cap = settings.SEARCH_MAX_ANY_VALUES
    if flt.op_string == ARRAY_CONTAINS_ANY and len(flt.value) > cap:
        logger.warning("array_contains_any on %s trimmed %d -> %d values", flt.field_path, len(flt.value), cap)
        return FieldFilter(flt.field_path, flt.op_string, flt.value[:cap])
    return flt


def search(collection: str, request: SearchRequest, limit: Optional[int] = None) -> List[Dict]:
    """Run ``request`` against ``collection`` and return matching documents as dicts with an ``id`` key."""
    flt = _cap_any_values(request.to_filter())
    if isinstance(flt.value, list) and not flt.value:
        # 검색어가 trigram 길이(3) 미만
        logger.info("search.skip collection=%s field=%s reason=no_tokens", collection, flt.field_path)
        return []
    limit = limit or settings.SEARCH_DEFAULT_LIMIT
    query = get_db().collection(collection).where(filter=flt).limit(limit)
    results: List[Dict] = []
    for snap in query.stream():
        data = snap.to_dict() or {}
        results.append({"id": snap.id, **data})
    logger.info("search collection=%s field=%s op=%s hits=%d", collection, flt.field_path, flt.op_string, len(results))
    return results
