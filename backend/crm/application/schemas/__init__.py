from .customer import (
    CustomerInput,
    CustomerMutationResponse,
    CustomerPageResponse,
    CustomerResponse,
)
from .customer_import import ImportRejectionSchema, ImportReportResponse
from .activity import ActivityResponse
from .statistics import (
    CategoryCountSchema,
    DashboardResponse,
    ProductCountSchema,
    StatisticsResponse,
)

__all__ = [
    "CustomerInput",
    "CustomerMutationResponse",
    "CustomerPageResponse",
    "CustomerResponse",
    "ImportRejectionSchema",
    "ImportReportResponse",
    "ActivityResponse",
    "CategoryCountSchema",
    "DashboardResponse",
    "ProductCountSchema",
    "StatisticsResponse",
]
