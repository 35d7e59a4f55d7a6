from .base import Base
from .session import create_db_engine, create_session_factory
from .models import StorageEntryModel

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "StorageEntryModel",
]
