from .customer import CATEGORY_LABELS, CustomerCategory, CustomerRecord
from .activity import ACTION_LABELS, ActivityAction, ActivityEntry
from .validation import ValidationResult
from .mutation import MutationResult
from .customer_import import ImportCandidate, ImportReport
from .view import Page, SortDirection, SortField
from .statistics import (
    DashboardSummary,
    ProductCount,
    StatisticsReport,
    TimeWindow,
)

__all__ = [
    "CATEGORY_LABELS",
    "CustomerCategory",
    "CustomerRecord",
    "ACTION_LABELS",
    "ActivityAction",
    "ActivityEntry",
    "ValidationResult",
    "MutationResult",
    "ImportCandidate",
    "ImportReport",
    "Page",
    "SortDirection",
    "SortField",
    "DashboardSummary",
    "ProductCount",
    "StatisticsReport",
    "TimeWindow",
]
