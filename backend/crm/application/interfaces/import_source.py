"""Abstract interface (port) for sources of bulk-import candidates."""

from abc import ABC, abstractmethod

from crm.domain.entities import ImportCandidate


class ImportSource(ABC):
    """Port for anything that yields raw customer rows to import."""

    label: str = "import"

    @abstractmethod
    def read(self) -> list[ImportCandidate]:
        """Return the candidates in source order.

        Raises:
            ImportSourceError: The source cannot be parsed at all.
        """
        ...
