"""SQLAlchemy engine and session factory configuration."""

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from crm.infrastructure.database.base import Base


def _ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-based SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    _ensure_sqlite_dir(database_url)
    return create_engine(database_url, echo=echo, future=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create tables if missing and return a session factory bound to ``engine``."""
    Base.metadata.create_all(engine)
    return sessionmaker(engine, expire_on_commit=False)
