"""Domain value object returned by every customer store mutation."""

from dataclasses import dataclass

from crm.domain.entities.customer import CustomerRecord
from crm.domain.exceptions import PersistenceFailure


@dataclass
class MutationResult:
    """What a create/update/delete did to the canonical collection.

    ``applied`` is False only for a delete the caller declined to confirm.
    ``persistence_error`` is set when the change stayed in memory but could
    not be written to storage.
    """

    record: CustomerRecord
    applied: bool = True
    persistence_error: PersistenceFailure | None = None

    @property
    def saved(self) -> bool:
        return self.applied and self.persistence_error is None
