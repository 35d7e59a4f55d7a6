"""FastAPI dependency injection — hands request handlers the app's services."""

from fastapi import Request

from crm.application.services import (
    ActivityLog,
    CustomerImportService,
    CustomerStore,
    StatisticsService,
)
from crm.config import Settings
from crm.infrastructure.container import CRMContainer


def get_container(request: Request) -> CRMContainer:
    return request.app.state.container


def get_settings_dependency(request: Request) -> Settings:
    return get_container(request).settings


def get_customer_store(request: Request) -> CustomerStore:
    """Provides the application's single CustomerStore."""
    return get_container(request).store


def get_activity_log(request: Request) -> ActivityLog:
    return get_container(request).activity_log


def get_statistics_service(request: Request) -> StatisticsService:
    return get_container(request).statistics


def get_import_service(request: Request) -> CustomerImportService:
    return get_container(request).importer
