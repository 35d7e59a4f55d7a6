"""Unit tests for the JSON file and SQLAlchemy storage adapters."""

import json

import pytest

from crm.application.services import ActivityLog, CustomerStore
from crm.application.schemas import CustomerInput
from crm.domain.exceptions import StorageError
from crm.infrastructure.database import create_db_engine, create_session_factory
from crm.infrastructure.database.repositories import SQLAlchemyRecordStorage
from crm.infrastructure.storage import JsonFileStorage


# ── JsonFileStorage ──────────────────────────────────────────────────


def test_json_storage_missing_file_loads_empty(tmp_path):
    storage = JsonFileStorage(tmp_path / "customerData.json")

    assert storage.load() == []
    assert storage.name == "customerData.json"


def test_json_storage_round_trip_keeps_unicode(tmp_path):
    path = tmp_path / "nested" / "customerData.json"
    storage = JsonFileStorage(path)

    assert storage.save([{"name": "Nguyễn Văn An"}]) is True

    assert storage.load() == [{"name": "Nguyễn Văn An"}]
    assert "Nguyễn" in path.read_text("utf-8")
    assert list(path.parent.glob("*.tmp")) == []


def test_json_storage_corrupt_file_raises(tmp_path):
    path = tmp_path / "customerData.json"
    path.write_text("{not json", "utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(path).load()


def test_json_storage_non_list_raises(tmp_path):
    path = tmp_path / "customerData.json"
    path.write_text(json.dumps({"a": 1}), "utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(path).load()


def test_json_storage_save_failure_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", "utf-8")
    storage = JsonFileStorage(blocker / "customerData.json")

    assert storage.save([{"a": 1}]) is False


# ── SQLAlchemyRecordStorage ──────────────────────────────────────────


@pytest.fixture
def session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'db' / 'crm.db'}")
    yield create_session_factory(engine)
    engine.dispose()


def test_sql_storage_missing_key_loads_empty(session_factory):
    assert SQLAlchemyRecordStorage(session_factory, "customerData").load() == []


def test_sql_storage_insert_then_overwrite(session_factory):
    storage = SQLAlchemyRecordStorage(session_factory, "customerData")

    assert storage.save([{"id": "1"}]) is True
    assert storage.save([{"id": "2"}, {"id": "1"}]) is True

    assert storage.load() == [{"id": "2"}, {"id": "1"}]


def test_sql_storage_keys_are_independent(session_factory):
    customers = SQLAlchemyRecordStorage(session_factory, "customerData")
    activity = SQLAlchemyRecordStorage(session_factory, "activityLog")

    customers.save([{"id": "1"}])

    assert activity.load() == []
    assert activity.name == "activityLog"


def test_store_survives_restart_on_sql_storage(session_factory):
    def build() -> CustomerStore:
        return CustomerStore(
            SQLAlchemyRecordStorage(session_factory, "customerData"),
            ActivityLog(SQLAlchemyRecordStorage(session_factory, "activityLog")),
        )

    first = build()
    created = first.create(CustomerInput(name="An", product="Gói A", phone="0912345678")).record

    second = build()

    assert [r.id for r in second.all()] == [created.id]
    assert second.get(created.id).updated_at == created.updated_at
