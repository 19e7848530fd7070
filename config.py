from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env.local", env_file_encoding="utf-8", extra="ignore")

    # Firebase
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None
    FIREBASE_CREDENTIALS_JSON_STRING: Optional[str] = None

    # Logging
    LOG_DIR: str = "logs"
    LOG_JSON: bool = False

    # Backfill: Firestore batched writes cap at 500 operations
    BACKFILL_BATCH_SIZE: int = 400

    # Query
    # array_contains_any accepts at most 30 comparison values
    SEARCH_MAX_ANY_VALUES: int = 30
    SEARCH_DEFAULT_LIMIT: int = 50


settings = Settings()
