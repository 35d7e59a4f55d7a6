"""Customer store — owner of the canonical customer collection.

All writes go through this service: it validates candidates, enforces phone
uniqueness, keeps the newest-first order, saves through the storage port and
writes an activity entry for each change. Readers (view engine, statistics)
only ever see copies.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import datetime

from crm.application.interfaces import Confirmation, RecordStorage
from crm.application.schemas.customer import CustomerInput
from crm.application.services.activity_log import ActivityLog, utc_now
from crm.application.services.validation import (
    find_phone_collision,
    normalize_import_row,
    validate_candidate,
)
from crm.domain.entities import (
    ActivityAction,
    CustomerCategory,
    CustomerRecord,
    ImportCandidate,
    ImportReport,
    MutationResult,
)
from crm.domain.exceptions import (
    DuplicatePhoneError,
    ImportRowError,
    NotFoundError,
    PersistenceFailure,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_ENTITY = "Customer"


class CustomerStore:
    """Orchestrates customer CRUD and bulk import. Depends on ports (DI)."""

    def __init__(
        self,
        storage: RecordStorage,
        activity_log: ActivityLog,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._storage = storage
        self._activity_log = activity_log
        self._clock = clock
        # Single writer at a time; API requests run on a thread pool.
        self._lock = threading.RLock()
        self._customers: list[CustomerRecord] = self._load()

    # ── Loading / persistence ───────────────────────────────────────

    def _load(self) -> list[CustomerRecord]:
        try:
            blobs = self._storage.load()
        except StorageError as exc:
            logger.error("Could not load customers from %s: %s", self._storage.name, exc)
            return []

        records: list[CustomerRecord] = []
        for blob in blobs:
            try:
                records.append(CustomerRecord.from_dict(blob))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed customer blob %r: %s", blob, exc)

        logger.info("Loaded %d customers from %s", len(records), self._storage.name)
        return records

    def persist(self) -> PersistenceFailure | None:
        """Save the canonical collection; returns the failure, if any."""
        with self._lock:
            blobs = [record.to_dict() for record in self._customers]
            if self._storage.save(blobs):
                return None
        failure = PersistenceFailure(self._storage.name, "could not save customer list")
        logger.warning("%s; in-memory changes kept", failure)
        return failure

    # ── Reads ───────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._customers)

    def all(self) -> list[CustomerRecord]:
        """Snapshot of the canonical collection, newest first."""
        with self._lock:
            return list(self._customers)

    def get(self, customer_id: str) -> CustomerRecord:
        with self._lock:
            return self._customers[self._index_of(customer_id)]

    def products(self) -> list[str]:
        """Distinct product names in first-seen order (autocomplete list)."""
        return list(dict.fromkeys(record.product for record in self.all()))

    def _index_of(self, customer_id: str) -> int:
        for index, record in enumerate(self._customers):
            if record.id == customer_id:
                return index
        raise NotFoundError(_ENTITY, customer_id)

    # ── Mutations ───────────────────────────────────────────────────

    def create(self, data: CustomerInput) -> MutationResult:
        candidate = data.model_dump()
        with self._lock:
            self._check(candidate)
            record = CustomerRecord(
                name=data.name,
                product=data.product,
                phone=data.phone,
                category=self._category_of(candidate),
                note=data.note or "",
                updated_at=self._clock(),
            )
            self._customers.insert(0, record)
            failure = self._record(
                self.persist(), ActivityAction.CREATED, f"Đã thêm khách hàng {record.name}"
            )

        logger.info("Created customer %s (%s)", record.id, record.name)
        return MutationResult(record=record, persistence_error=failure)

    def update(self, customer_id: str, data: CustomerInput) -> MutationResult:
        candidate = data.model_dump()
        with self._lock:
            record = self._customers[self._index_of(customer_id)]
            self._check(candidate, exclude_id=record.id)
            record.replace_fields(
                name=data.name,
                product=data.product,
                phone=data.phone,
                category=self._category_of(candidate),
                note=data.note or "",
                timestamp=self._clock(),
            )
            failure = self._record(
                self.persist(), ActivityAction.UPDATED, f"Đã cập nhật thông tin {record.name}"
            )

        logger.info("Updated customer %s (%s)", record.id, record.name)
        return MutationResult(record=record, persistence_error=failure)

    def delete(self, customer_id: str, confirmation: Confirmation) -> MutationResult:
        with self._lock:
            index = self._index_of(customer_id)
            record = self._customers[index]

            if not confirmation.confirm(
                f"Bạn có chắc chắn muốn xóa khách hàng {record.name}?"
            ):
                logger.info("Deletion of customer %s not confirmed", record.id)
                return MutationResult(record=record, applied=False)

            del self._customers[index]
            failure = self._record(
                self.persist(), ActivityAction.DELETED, f"Đã xóa khách hàng {record.name}"
            )

        logger.info("Deleted customer %s (%s)", record.id, record.name)
        return MutationResult(record=record, persistence_error=failure)

    def bulk_import(
        self,
        candidates: Iterable[ImportCandidate],
        source_label: str | None = None,
    ) -> ImportReport:
        """Insert many candidates in one pass, reporting each rejection.

        Each candidate is checked against the collection as it stands when
        that candidate is reached, so a phone repeated later in the same
        batch is rejected. The list is saved once, at the end.
        """
        report = ImportReport()

        with self._lock:
            for candidate in candidates:
                row = normalize_import_row(candidate.data)
                try:
                    self._check(row)
                except ValidationError as exc:
                    report.rejections.append(
                        ImportRowError(
                            candidate.source_ref,
                            dict(candidate.data),
                            "; ".join(exc.field_errors.values()),
                        )
                    )
                    continue
                except DuplicatePhoneError as exc:
                    report.rejections.append(
                        ImportRowError(
                            candidate.source_ref,
                            dict(candidate.data),
                            f"SĐT trùng với khách hàng: {exc.existing.name}",
                        )
                    )
                    continue

                record = CustomerRecord(
                    name=row["name"],
                    product=row["product"],
                    phone=row["phone"],
                    category=self._category_of(row),
                    note=row.get("note", ""),
                    updated_at=self._clock(),
                )
                self._customers.insert(0, record)
                report.accepted.append(record)

            failure = self.persist()
            description = f"Đã nhập {report.accepted_count} khách hàng"
            if source_label:
                description += f" từ {source_label}"
            report.persistence_error = self._record(failure, ActivityAction.IMPORTED, description)

        logger.info(
            "Bulk import finished: %d accepted, %d rejected",
            report.accepted_count,
            report.rejected_count,
        )
        return report

    # ── Helpers ─────────────────────────────────────────────────────

    def _record(
        self, failure: PersistenceFailure | None, action: str, description: str
    ) -> PersistenceFailure | None:
        """Write the activity entry; a failed customer save takes precedence."""
        activity_failure = self._activity_log.append(action, description)
        return failure or activity_failure

    def _check(self, candidate: dict, exclude_id: str | None = None) -> None:
        result = validate_candidate(candidate)
        if not result.valid:
            logger.info("Rejected candidate: %s", result.message)
            raise ValidationError(result.field_errors)

        existing = find_phone_collision(self._customers, candidate["phone"], exclude_id=exclude_id)
        if existing is not None:
            logger.info("Rejected candidate: phone %s already used by %s", existing.phone, existing.id)
            raise DuplicatePhoneError(existing)

    @staticmethod
    def _category_of(candidate: dict) -> CustomerCategory:
        return CustomerCategory.parse(candidate.get("category")) or CustomerCategory.REGULAR
