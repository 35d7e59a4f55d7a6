from datetime import datetime, tzinfo
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Customer CRM API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3020"]

    # Persistence: "json" (one file per list) or "database" (SQLAlchemy)
    storage_backend: str = "json"
    data_dir: str = "data"
    database_url: str = "sqlite:///data/crm.db"
    customer_storage_key: str = "customerData"
    activity_storage_key: str = "activityLog"

    # Customer table & dashboard
    activity_log_capacity: int = 50
    page_size: int = 10
    top_products_limit: int = 5
    timezone: str = "Asia/Ho_Chi_Minh"  # calendar months/quarters for statistics

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_store: str = "INFO"            # customer store / activity log
    log_level_import: str = "INFO"           # CustomerImport pipeline

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def tz(self) -> tzinfo:
        return ZoneInfo(self.timezone)

    def now(self) -> datetime:
        """Current time in the configured timezone."""
        return datetime.now(self.tz)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
