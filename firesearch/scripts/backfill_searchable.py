# backfill_searchable.py
"""기존 Firestore 문서에 searchable 필드(fts_tri_<key>, ac_pre_<key>)를 채워 넣는 백필 스크립트.

    python -m firesearch.scripts.backfill_searchable --collection products --field title
    python -m firesearch.scripts.backfill_searchable --collection users --field username --modes autoComplete --dry-run
"""
from __future__ import annotations

import argparse
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from config import settings
from firesearch.domain.search_schema import SearchType
from firesearch.services import searchable_store
from firesearch.services.make_searchable import build_searchable_fields
from .logging_config import get_logger, log_backfill_event, log_batch_summary, set_run_id, setup_logging

logger = get_logger("backfill")

DEFAULT_MODES = [SearchType.FULL_TEXT_SEARCH.value, SearchType.AUTO_COMPLETE.value]


@dataclass
class BackfillStats:
    processed: int = 0
    updated: int = 0
    skipped: int = 0
    duration: float = 0.0
    errors: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict:
        return {
            "processed": self.processed,
            "updated": self.updated,
            "skipped": self.skipped,
            "duration": round(self.duration, 3),
            "errors": len(self.errors),
        }


class SearchableBackfill:
    """컬렉션 단위 searchable 필드 백필"""

    def __init__(self, db, collection: str, source_field: str, modes: List[str],
                 key: Optional[str] = None, batch_size: Optional[int] = None, dry_run: bool = False):
        self.db = db
        self.collection = collection
        self.source_field = source_field
        self.key = key or source_field
        self.modes = modes
        self.batch_size = batch_size or settings.BACKFILL_BATCH_SIZE
        self.dry_run = dry_run
        self.stats = BackfillStats()

    def run(self, limit: Optional[int] = None) -> Dict:
        start = time.time()
        log_backfill_event("backfill_start", {
            "collection": self.collection,
            "field": self.source_field,
            "key": self.key,
            "modes": self.modes,
            "limit": limit,
            "dry_run": self.dry_run,
        })

        col = self.db.collection(self.collection)
        query = col.limit(limit) if limit else col
        batch = None if self.dry_run else self.db.batch()
        pending = 0

        for snap in query.stream():
            self.stats.processed += 1
            data = snap.to_dict() or {}
            value = data.get(self.source_field)
            if not isinstance(value, str):
                self.stats.skipped += 1
                continue

            fields = build_searchable_fields(self.key, value, self.modes)
            if not fields:
                self.stats.skipped += 1
                continue

            if self.dry_run:
                self.stats.updated += 1
                logger.debug("dry-run doc=%s/%s fields=%s", self.collection, snap.id, list(fields))
                continue

            # key 는 literal 필드명으로 저장 (write_searchable 과 동일)
            batch.set(snap.reference, fields, merge=True)
            pending += 1
            if pending >= self.batch_size:
                self._commit(batch, pending)
                batch = self.db.batch()
                pending = 0

        if pending:
            self._commit(batch, pending)

        self.stats.duration = time.time() - start
        summary = self.stats.as_dict()
        log_batch_summary(summary)
        log_backfill_event("backfill_complete", summary)
        return summary

    def _commit(self, batch, pending: int):
        try:
            batch.commit()
            self.stats.updated += pending
            logger.info("firestore.batch commit collection=%s writes=%d", self.collection, pending)
        except Exception as e:
            self.stats.errors.append(str(e))
            logger.error("firestore.batch commit 실패 collection=%s writes=%d - %s", self.collection, pending, e)
            raise


def parse_modes(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_MODES)
    return [m.strip() for m in raw.split(",") if m.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Firestore searchable 필드 백필")
    parser.add_argument("--collection", required=True, help="대상 컬렉션")
    parser.add_argument("--field", required=True, help="원본 텍스트 필드")
    parser.add_argument("--key", default=None, help="searchable 필드 이름에 쓸 key (기본: --field)")
    parser.add_argument("--modes", default=None, help="fullTextSearch,autoComplete (기본: 둘 다)")
    parser.add_argument("--limit", type=int, default=None, help="처리할 최대 문서 수 (기본: 전체)")
    parser.add_argument("--batch-size", type=int, default=settings.BACKFILL_BATCH_SIZE, help="batch commit 단위")
    parser.add_argument("--dry-run", action="store_true", help="쓰기 없이 집계만")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    set_run_id(uuid.uuid4().hex[:12])

    if not searchable_store.init_firebase():
        logger.error("Firebase 초기화 실패로 백필 중단")
        return 1

    backfill = SearchableBackfill(
        searchable_store.get_db(),
        args.collection,
        args.field,
        parse_modes(args.modes),
        key=args.key,
        batch_size=args.batch_size,
        dry_run=args.dry_run,
    )
    result = backfill.run(limit=args.limit)
    print(f"[RESULT] {result}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
