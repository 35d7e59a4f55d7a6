"""Concrete RecordStorage implementation backed by SQLAlchemy."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from crm.application.interfaces import RecordStorage
from crm.domain.exceptions import StorageError
from crm.infrastructure.database.models import StorageEntryModel

logger = logging.getLogger(__name__)


class SQLAlchemyRecordStorage(RecordStorage):
    """Implements the RecordStorage port as one row in ``storage_entries``."""

    def __init__(self, session_factory: sessionmaker[Session], key: str):
        self._session_factory = session_factory
        self._key = key
        self.name = key

    def load(self) -> list[dict[str, Any]]:
        try:
            with self._session_factory() as session:
                model = session.get(StorageEntryModel, self._key)
                value = model.value if model is not None else []
        except SQLAlchemyError as exc:
            raise StorageError(f"Cannot read storage key '{self._key}': {exc}") from exc

        if not isinstance(value, list):
            raise StorageError(f"Storage key '{self._key}' does not hold a list")
        return value

    def save(self, items: list[dict[str, Any]]) -> bool:
        try:
            with self._session_factory.begin() as session:
                model = session.get(StorageEntryModel, self._key)
                if model is None:
                    session.add(StorageEntryModel(key=self._key, value=list(items)))
                else:
                    model.value = list(items)
        except SQLAlchemyError as exc:
            logger.error("Could not save storage key '%s': %s", self._key, exc)
            return False
        return True
