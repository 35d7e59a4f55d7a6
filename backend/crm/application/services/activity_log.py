"""Activity log — bounded, newest-first history of customer list changes."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from crm.application.interfaces import RecordStorage
from crm.domain.entities import ActivityEntry
from crm.domain.exceptions import PersistenceFailure, StorageError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ActivityLog:
    """Append-only log persisted as its own list, separate from customers.

    Entries are kept newest first; once the log holds ``capacity`` entries
    each append evicts the oldest one.
    """

    def __init__(
        self,
        storage: RecordStorage,
        capacity: int = DEFAULT_CAPACITY,
        clock: Callable[[], datetime] = utc_now,
    ):
        if capacity < 1:
            raise ValueError("Activity log capacity must be at least 1")
        self._storage = storage
        self._capacity = capacity
        self._clock = clock
        self._entries: list[ActivityEntry] = self._load()

    def _load(self) -> list[ActivityEntry]:
        try:
            blobs = self._storage.load()
        except StorageError as exc:
            logger.error("Could not load activity log from %s: %s", self._storage.name, exc)
            return []

        entries: list[ActivityEntry] = []
        for blob in blobs:
            try:
                entries.append(ActivityEntry.from_dict(blob))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed activity entry %r: %s", blob, exc)
        return entries[: self._capacity]

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, action: str, description: str) -> PersistenceFailure | None:
        """Add an entry at the front and save; returns the save failure, if any.

        The entry stays in memory either way.
        """
        entry = ActivityEntry(action=action, description=description, timestamp=self._clock())
        self._entries.insert(0, entry)
        del self._entries[self._capacity :]

        if self._storage.save([e.to_dict() for e in self._entries]):
            return None
        failure = PersistenceFailure(self._storage.name, "could not save activity log")
        logger.warning("%s; entry kept in memory", failure)
        return failure

    def recent(self, n: int = 10) -> list[ActivityEntry]:
        if n <= 0:
            return []
        return self._entries[:n]

    def latest(self) -> ActivityEntry | None:
        return self._entries[0] if self._entries else None
