"""Domain-specific exceptions — framework-independent."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from crm.domain.entities.customer import CustomerRecord


class ValidationError(Exception):
    """Raised when a candidate record fails structural checks.

    ``field_errors`` maps field name → user-facing message.
    """

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.field_errors.items()))


class NotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class DuplicatePhoneError(DuplicateEntityError):
    """Raised when a phone number already belongs to another customer."""

    def __init__(self, existing: "CustomerRecord"):
        self.existing = existing
        super().__init__("Customer", "phone", existing.phone)


class StorageError(Exception):
    """Raised by a storage adapter when stored data cannot be read."""


class PersistenceFailure(Exception):
    """A save to storage failed while the in-memory state moved on.

    Not raised by the store: it is attached to mutation results as a
    warning that the change may not survive a reload.
    """

    def __init__(self, storage_name: str, message: str = "save failed"):
        self.storage_name = storage_name
        self.message = message
        super().__init__(f"[{storage_name}] {message}")


class ImportRowError(Exception):
    """One bulk-import candidate was rejected; collected, never raised."""

    def __init__(self, source_ref: int | str, raw_data: dict[str, Any], reason: str):
        self.source_ref = source_ref
        self.raw_data = raw_data
        self.reason = reason
        super().__init__(f"row {source_ref}: {reason}")


class ImportSourceError(Exception):
    """Raised when an import source cannot be read at all."""
