from .storage_entry_repository import SQLAlchemyRecordStorage

__all__ = ["SQLAlchemyRecordStorage"]
