"""Abstract interface (port) for writing the customer table to a file format."""

from abc import ABC, abstractmethod

from crm.domain.entities import CustomerRecord


class CustomerExporter(ABC):
    """Port for export formats — implemented in the infrastructure layer."""

    media_type: str
    extension: str

    @abstractmethod
    def export(self, rows: list[CustomerRecord]) -> bytes:
        """Render the rows, in the given order, as a downloadable file."""
        ...
