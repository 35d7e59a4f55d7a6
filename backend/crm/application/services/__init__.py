from .activity_log import ActivityLog
from .customer_store import CustomerStore
from .customer_import_service import CustomerImportService
from .statistics_service import StatisticsService
from .view_engine import CustomerView

__all__ = [
    "ActivityLog",
    "CustomerStore",
    "CustomerImportService",
    "StatisticsService",
    "CustomerView",
]
