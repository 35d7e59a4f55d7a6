"""Unit tests for the CustomerStore — CRUD, uniqueness, import, persistence."""

from datetime import datetime, timedelta, timezone

import pytest

from crm.application.interfaces import Confirmation, RecordStorage
from crm.application.schemas import CustomerInput
from crm.application.services import ActivityLog, CustomerStore
from crm.application.services.view_engine import filter_customers
from crm.domain.entities import ActivityAction, CustomerCategory, ImportCandidate
from crm.domain.exceptions import (
    DuplicatePhoneError,
    NotFoundError,
    StorageError,
    ValidationError,
)


# ── Fakes ────────────────────────────────────────────────────────────


class FakeStorage(RecordStorage):
    """In-memory storage; ``fail_saves`` simulates a full or broken disk."""

    def __init__(self, items: list[dict] | None = None, fail_saves: bool = False, fail_load: bool = False):
        self.items = list(items or [])
        self.fail_saves = fail_saves
        self.fail_load = fail_load
        self.save_count = 0
        self.name = "fake"

    def load(self) -> list[dict]:
        if self.fail_load:
            raise StorageError("corrupt")
        return list(self.items)

    def save(self, items: list[dict]) -> bool:
        self.save_count += 1
        if self.fail_saves:
            return False
        self.items = list(items)
        return True


class FakeConfirmation(Confirmation):
    def __init__(self, answer: bool):
        self.answer = answer
        self.prompts: list[str] = []

    def confirm(self, prompt_context: str) -> bool:
        self.prompts.append(prompt_context)
        return self.answer


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


def _input(name="An", product="Gói A", phone="0912345678", category="regular", note="") -> CustomerInput:
    return CustomerInput(name=name, product=product, phone=phone, category=category, note=note)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 15, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def activity_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def activity_log(activity_storage: FakeStorage, clock: FakeClock) -> ActivityLog:
    return ActivityLog(activity_storage, clock=clock)


@pytest.fixture
def store(storage: FakeStorage, activity_log: ActivityLog, clock: FakeClock) -> CustomerStore:
    return CustomerStore(storage, activity_log, clock=clock)


# ── create ───────────────────────────────────────────────────────────


def test_create_assigns_id_and_timestamp(store: CustomerStore, clock: FakeClock):
    result = store.create(_input(category="vip", note="first"))
    record = result.record

    assert result.saved is True
    assert record.id
    assert record.updated_at == datetime(2026, 3, 15, 9, 0, tzinfo=timezone.utc)
    assert store.get(record.id) is record
    assert (record.name, record.product, record.phone, record.category, record.note) == (
        "An",
        "Gói A",
        "0912345678",
        CustomerCategory.VIP,
        "first",
    )


def test_create_inserts_newest_first_and_persists(store: CustomerStore, storage: FakeStorage):
    first = store.create(_input(name="A", phone="0912345678")).record
    second = store.create(_input(name="B", phone="0987654321")).record

    assert [r.id for r in store.all()] == [second.id, first.id]
    assert [blob["id"] for blob in storage.items] == [second.id, first.id]


def test_create_defaults_category_to_regular(store: CustomerStore):
    record = store.create(_input(category=None)).record

    assert record.category is CustomerCategory.REGULAR


def test_create_logs_activity(store: CustomerStore, activity_log: ActivityLog):
    store.create(_input(name="An"))

    entry = activity_log.latest()
    assert entry.action == ActivityAction.CREATED
    assert "An" in entry.description


def test_create_invalid_raises_with_field_errors(store: CustomerStore, storage: FakeStorage):
    with pytest.raises(ValidationError) as exc_info:
        store.create(_input(name="", phone="123"))

    assert set(exc_info.value.field_errors) == {"name", "phone"}
    assert len(store) == 0
    assert storage.save_count == 0


def test_create_duplicate_phone_is_rejected_without_mutation(
    store: CustomerStore, storage: FakeStorage, activity_log: ActivityLog
):
    existing = store.create(_input(name="An")).record
    saves_before = storage.save_count

    with pytest.raises(DuplicatePhoneError) as exc_info:
        store.create(_input(name="Other", phone=existing.phone))

    assert exc_info.value.existing is existing
    assert len(store) == 1
    assert storage.save_count == saves_before
    assert len(activity_log) == 1


# ── update ───────────────────────────────────────────────────────────


def test_update_replaces_fields_keeps_id_and_position(store: CustomerStore, clock: FakeClock):
    older = store.create(_input(name="A", phone="0912345678")).record
    newer = store.create(_input(name="B", phone="0987654321")).record
    created_at = older.updated_at

    result = store.update(older.id, _input(name="A2", product="Gói Z", phone="0912345678", category="potential"))

    assert result.record.id == older.id
    assert result.record.name == "A2"
    assert result.record.category is CustomerCategory.POTENTIAL
    assert result.record.updated_at > created_at
    assert [r.id for r in store.all()] == [newer.id, older.id]


def test_update_allows_keeping_own_phone(store: CustomerStore):
    record = store.create(_input()).record

    result = store.update(record.id, _input(name="Renamed"))

    assert result.record.phone == record.phone


def test_update_to_another_customers_phone_is_rejected(store: CustomerStore):
    a = store.create(_input(name="A", phone="0912345678")).record
    b = store.create(_input(name="B", phone="0987654321")).record

    with pytest.raises(DuplicatePhoneError):
        store.update(b.id, _input(name="B", phone=a.phone))

    assert store.get(b.id).phone == "0987654321"


def test_update_missing_raises_not_found(store: CustomerStore):
    with pytest.raises(NotFoundError):
        store.update("missing", _input())


def test_update_invalid_leaves_record_untouched(store: CustomerStore):
    record = store.create(_input()).record

    with pytest.raises(ValidationError):
        store.update(record.id, _input(product=""))

    assert store.get(record.id).product == "Gói A"


# ── delete ───────────────────────────────────────────────────────────


def test_delete_confirmed_removes_record(store: CustomerStore, activity_log: ActivityLog):
    keep = store.create(_input(name="Keep", phone="0912345678")).record
    gone = store.create(_input(name="Gone", phone="0987654321")).record
    confirmation = FakeConfirmation(True)

    result = store.delete(gone.id, confirmation)

    assert result.applied is True
    assert len(store) == 1
    assert "Gone" in confirmation.prompts[0]
    assert activity_log.latest().action == ActivityAction.DELETED
    with pytest.raises(NotFoundError):
        store.get(gone.id)
    assert store.get(keep.id) is keep


def test_delete_declined_changes_nothing(store: CustomerStore, storage: FakeStorage):
    record = store.create(_input()).record
    saves_before = storage.save_count

    result = store.delete(record.id, FakeConfirmation(False))

    assert result.applied is False
    assert result.saved is False
    assert len(store) == 1
    assert storage.save_count == saves_before


def test_delete_missing_raises_before_asking(store: CustomerStore):
    confirmation = FakeConfirmation(True)

    with pytest.raises(NotFoundError):
        store.delete("missing", confirmation)

    assert confirmation.prompts == []


# ── bulk import ──────────────────────────────────────────────────────


def test_bulk_import_rejects_in_batch_duplicates(store: CustomerStore, storage: FakeStorage):
    report = store.bulk_import(
        [
            ImportCandidate(2, {"name": "A", "product": "P", "phone": "0912345678"}),
            ImportCandidate(3, {"name": "B", "product": "P", "phone": "0912345678"}),
        ]
    )

    assert report.accepted_count == 1
    assert report.rejected_count == 1
    rejection = report.rejections[0]
    assert rejection.source_ref == 3
    assert rejection.raw_data["name"] == "B"
    assert "A" in rejection.reason
    assert storage.save_count == 1


def test_bulk_import_reports_invalid_rows_and_continues(store: CustomerStore):
    report = store.bulk_import(
        [
            ImportCandidate(2, {"Name": "A", "Product": "P"}),
            ImportCandidate(3, {"Name": "B", "Product": "P", "Phone": "12"}),
            ImportCandidate(4, {"Name": "C", "Product": "P", "Phone": "0987654321", "Category": "VIP"}),
        ]
    )

    assert [r.source_ref for r in report.rejections] == [2, 3]
    assert report.accepted_count == 1
    assert report.accepted[0].category is CustomerCategory.VIP


def test_bulk_import_checks_against_existing_records(store: CustomerStore):
    store.create(_input(name="Existing", phone="0912345678"))

    report = store.bulk_import([ImportCandidate(2, {"name": "X", "product": "P", "phone": "0912345678"})])

    assert report.accepted_count == 0
    assert "Existing" in report.rejections[0].reason


def test_bulk_import_inserts_each_accepted_row_at_front(store: CustomerStore):
    report = store.bulk_import(
        [
            ImportCandidate(2, {"name": "First", "product": "P", "phone": "0912345678"}),
            ImportCandidate(3, {"name": "Second", "product": "P", "phone": "0987654321"}),
        ]
    )

    assert [r.name for r in store.all()] == ["Second", "First"]
    assert [r.name for r in report.accepted] == ["First", "Second"]


def test_bulk_import_writes_one_summary_activity(store: CustomerStore, activity_log: ActivityLog):
    store.bulk_import(
        [
            ImportCandidate(2, {"name": "A", "product": "P", "phone": "0912345678"}),
            ImportCandidate(3, {"name": "B", "product": "P", "phone": "0987654321"}),
        ],
        source_label="customers.csv",
    )

    assert len(activity_log) == 1
    entry = activity_log.latest()
    assert entry.action == ActivityAction.IMPORTED
    assert "2" in entry.description
    assert "customers.csv" in entry.description


# ── persistence ──────────────────────────────────────────────────────


def test_save_failure_keeps_memory_and_reports_warning(activity_log: ActivityLog, clock: FakeClock):
    store = CustomerStore(FakeStorage(fail_saves=True), activity_log, clock=clock)

    result = store.create(_input())

    assert result.saved is False
    assert result.persistence_error is not None
    assert "fake" in str(result.persistence_error)
    assert len(store) == 1


def test_store_reloads_saved_records(storage: FakeStorage, activity_log: ActivityLog, clock: FakeClock):
    original = CustomerStore(storage, activity_log, clock=clock)
    record = original.create(_input(category="vip", note="ghi chú")).record

    reloaded = CustomerStore(storage, activity_log, clock=clock)

    again = reloaded.get(record.id)
    assert again == record


def test_load_failure_starts_empty(activity_log: ActivityLog):
    store = CustomerStore(FakeStorage(fail_load=True), activity_log)

    assert len(store) == 0


def test_malformed_blobs_are_skipped(activity_log: ActivityLog):
    storage = FakeStorage(
        items=[
            {"id": "1", "time": "2026-01-01T00:00:00+00:00", "name": "A", "product": "P", "phone": "0912345678"},
            {"id": "2", "time": "not a date", "name": "B", "product": "P", "phone": "0987654321"},
            {"name": "C"},
        ]
    )

    store = CustomerStore(storage, activity_log)

    assert [r.id for r in store.all()] == ["1"]
    assert store.get("1").category is CustomerCategory.REGULAR


def test_non_mapping_blobs_are_skipped(activity_log: ActivityLog):
    good = {"id": "1", "time": "2026-01-01T00:00:00+00:00", "name": "A", "product": "P", "phone": "0912345678"}
    storage = FakeStorage(items=["garbage", 42, None, ["list"], good])

    store = CustomerStore(storage, activity_log)

    assert [r.id for r in store.all()] == ["1"]


def test_blobs_with_null_text_fields_are_skipped(activity_log: ActivityLog):
    base = {"id": "1", "time": "2026-01-01T00:00:00+00:00", "name": "A", "product": "P", "phone": "0912345678"}
    storage = FakeStorage(
        items=[
            {**base, "id": "2", "name": None},
            {**base, "id": "3", "product": None},
            {**base, "id": "4", "phone": 912345678},
            base,
        ]
    )

    store = CustomerStore(storage, activity_log)

    assert [r.id for r in store.all()] == ["1"]
    assert filter_customers(store.all(), "x") == []


def test_activity_save_failure_is_reported_on_mutations(storage: FakeStorage, clock: FakeClock):
    activity_log = ActivityLog(FakeStorage(fail_saves=True), clock=clock)
    store = CustomerStore(storage, activity_log, clock=clock)

    created = store.create(_input())
    updated = store.update(created.record.id, _input(product="Gói B"))
    deleted = store.delete(created.record.id, FakeConfirmation(True))

    for result in (created, updated, deleted):
        assert result.saved is False
        assert "fake" in str(result.persistence_error)
    assert storage.save_count == 3


def test_activity_save_failure_is_reported_on_bulk_import(storage: FakeStorage, clock: FakeClock):
    activity_log = ActivityLog(FakeStorage(fail_saves=True), clock=clock)
    store = CustomerStore(storage, activity_log, clock=clock)

    report = store.bulk_import([ImportCandidate(2, {"name": "An", "product": "A", "phone": "0912345678"})])

    assert report.accepted_count == 1
    assert report.persistence_error is not None
    assert len(storage.items) == 1


def test_customer_save_failure_takes_precedence(clock: FakeClock):
    activity_log = ActivityLog(FakeStorage(fail_saves=True), clock=clock)
    customers = FakeStorage(fail_saves=True)
    customers.name = "customers"
    store = CustomerStore(customers, activity_log, clock=clock)

    result = store.create(_input())

    assert result.persistence_error.storage_name == "customers"


def test_products_are_distinct_in_first_seen_order(store: CustomerStore):
    store.create(_input(product="Gói A", phone="0912345678"))
    store.create(_input(product="Gói B", phone="0912345679"))
    store.create(_input(product="Gói A", phone="0912345670"))

    assert store.products() == ["Gói A", "Gói B"]
