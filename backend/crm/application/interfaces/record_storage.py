"""Abstract storage interface (port) for persisted lists of records."""

from abc import ABC, abstractmethod
from typing import Any


class RecordStorage(ABC):
    """Port for best-effort persistence of one list of JSON-compatible blobs.

    Implemented in the infrastructure layer. Each instance owns one list
    (the customer collection or the activity log).
    """

    name: str = "storage"

    @abstractmethod
    def load(self) -> list[dict[str, Any]]:
        """Return the stored blobs; an empty list when nothing was saved yet.

        Raises:
            StorageError: The stored data exists but cannot be read.
        """
        ...

    @abstractmethod
    def save(self, items: list[dict[str, Any]]) -> bool:
        """Replace the stored list. Returns False if the write failed."""
        ...
