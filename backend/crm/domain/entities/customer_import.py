"""Domain entities for bulk import — candidates in, per-row report out."""

from dataclasses import dataclass, field
from typing import Any

from crm.domain.entities.customer import CustomerRecord
from crm.domain.exceptions import ImportRowError, PersistenceFailure


@dataclass
class ImportCandidate:
    """A raw row handed over by an import source.

    ``source_ref`` is whatever the source uses to point the user back at the
    row: a 1-based file line for CSV, a sheet row number for XLSX.
    """

    source_ref: int | str
    data: dict[str, Any]


@dataclass
class ImportReport:
    """Per-row accept/reject report for one bulk import batch."""

    accepted: list[CustomerRecord] = field(default_factory=list)
    rejections: list[ImportRowError] = field(default_factory=list)
    persistence_error: PersistenceFailure | None = None

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def rejected_count(self) -> int:
        return len(self.rejections)
