# logging_config.py
import logging
import logging.config
import logging.handlers
from pathlib import Path
from datetime import datetime
import json
import contextvars

from config import settings

# 실행 단위 식별자 (backfill run / request 등, ContextVar로 보관)
_run_id_ctx = contextvars.ContextVar("run_id", default="-")

class RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _run_id_ctx.get("-")
        return True

def set_run_id(run_id: str):
    _run_id_ctx.set(run_id)

def get_run_id() -> str:
    return _run_id_ctx.get("-")

def get_logger(name: str = __name__) -> logging.Logger:
    return logging.getLogger(name)

def build_dict_config(json_fmt: bool = False, log_dir: str | Path | None = None) -> dict:
    log_dir = Path(log_dir or settings.LOG_DIR)
    fmt = (
        '{"ts":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s",'
        '"run_id":"%(run_id)s","msg":"%(message)s"}'
        if json_fmt
        else '%(asctime)s | %(levelname)s | %(name)s | run=%(run_id)s | %(message)s'
    )

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "run_id": {"()": RunIdFilter},
        },
        "formatters": {
            "default": {
                "format": fmt,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "default",
                "filters": ["run_id"],
            },
            "file_app": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": "INFO",
                "formatter": "default",
                "filters": ["run_id"],
                "filename": str(log_dir / "app.log"),
                "when": "midnight",
                "interval": 1,
                "backupCount": 30,
                "encoding": "utf-8",
            },
            "file_backfill": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": "INFO",
                "formatter": "default",
                "filters": ["run_id"],
                "filename": str(log_dir / "backfill.log"),
                "when": "midnight",
                "interval": 1,
                "backupCount": 30,
                "encoding": "utf-8",
            },
        },
        "loggers": {
            # 루트 로거
            "": {
                "level": "INFO",
                "handlers": ["console", "file_app"],
            },
            # searchable 필드 백필 전용 로거
            "backfill": {
                "level": "INFO",
                "handlers": ["console", "file_backfill"],
                "propagate": False,
            },
        },
    }

def setup_logging(json_fmt: bool | None = None, log_dir: str | Path | None = None):
    if json_fmt is None:
        json_fmt = settings.LOG_JSON
    log_dir = Path(log_dir or settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_dict_config(json_fmt=json_fmt, log_dir=log_dir))

# ===== 백필 보조 함수들 =====
def log_backfill_event(event_type: str, details: dict, logger: logging.Logger | None = None):
    logger = logger or get_logger("backfill")
    logger.info("BACKFILL_EVENT: %s", json.dumps({
        "timestamp": datetime.now().isoformat(),
        "event_type": event_type,
        "details": details
    }, ensure_ascii=False, default=str))

def log_batch_summary(batch_info: dict, logger: logging.Logger | None = None):
    logger = logger or get_logger("backfill")
    summary = {
        'total_processed': batch_info.get('processed', 0),
        'updated_count': batch_info.get('updated', 0),
        'skipped_count': batch_info.get('skipped', 0),
        'duration_seconds': batch_info.get('duration', 0),
    }
    logger.info("배치 처리 완료: %s", json.dumps(summary, ensure_ascii=False))
