"""Wires storage adapters and services into one object per application."""

import logging
from dataclasses import dataclass
from pathlib import Path

from crm.application.interfaces import RecordStorage
from crm.application.services import (
    ActivityLog,
    CustomerImportService,
    CustomerStore,
    StatisticsService,
)
from crm.config import Settings
from crm.infrastructure.database import create_db_engine, create_session_factory
from crm.infrastructure.database.repositories import SQLAlchemyRecordStorage
from crm.infrastructure.storage import JsonFileStorage

logger = logging.getLogger(__name__)


@dataclass
class CRMContainer:
    """Everything one running application shares across requests."""

    settings: Settings
    activity_log: ActivityLog
    store: CustomerStore
    statistics: StatisticsService
    importer: CustomerImportService


def _build_storages(settings: Settings) -> tuple[RecordStorage, RecordStorage]:
    backend = settings.storage_backend.lower()

    if backend == "json":
        data_dir = Path(settings.data_dir)
        return (
            JsonFileStorage(data_dir / f"{settings.customer_storage_key}.json"),
            JsonFileStorage(data_dir / f"{settings.activity_storage_key}.json"),
        )

    if backend == "database":
        engine = create_db_engine(settings.database_url, echo=settings.log_level_sql.upper() == "DEBUG")
        session_factory = create_session_factory(engine)
        return (
            SQLAlchemyRecordStorage(session_factory, settings.customer_storage_key),
            SQLAlchemyRecordStorage(session_factory, settings.activity_storage_key),
        )

    raise ValueError(f"Unknown storage backend '{settings.storage_backend}' (expected 'json' or 'database')")


def build_container(
    settings: Settings,
    customer_storage: RecordStorage | None = None,
    activity_storage: RecordStorage | None = None,
) -> CRMContainer:
    """Build the services; explicit storages override the configured backend."""
    if customer_storage is None or activity_storage is None:
        default_customers, default_activity = _build_storages(settings)
        customer_storage = customer_storage or default_customers
        activity_storage = activity_storage or default_activity

    activity_log = ActivityLog(activity_storage, capacity=settings.activity_log_capacity)
    store = CustomerStore(customer_storage, activity_log)
    statistics = StatisticsService(
        store,
        activity_log,
        clock=settings.now,
        top_products_limit=settings.top_products_limit,
    )
    logger.info(
        "CRM ready — backend=%s, customers=%d, activities=%d",
        settings.storage_backend,
        len(store),
        len(activity_log),
    )
    return CRMContainer(
        settings=settings,
        activity_log=activity_log,
        store=store,
        statistics=statistics,
        importer=CustomerImportService(store),
    )
