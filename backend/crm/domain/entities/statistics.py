"""Domain entities for dashboard widgets and the statistics page."""

from dataclasses import dataclass, field
from enum import Enum


class TimeWindow(str, Enum):
    """Time ranges offered by the statistics page selector."""

    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    THIS_MONTH = "thisMonth"
    THIS_QUARTER = "thisQuarter"
    THIS_YEAR = "thisYear"
    ALL = "all"


@dataclass
class ProductCount:
    product: str
    count: int


@dataclass
class DashboardSummary:
    """Figures shown on the overview widgets."""

    total_customers: int
    popular_product: str | None
    recent_activity: str | None
    category_counts: dict[str, int] = field(default_factory=dict)
    top_products: list[ProductCount] = field(default_factory=list)
    growth_rate: float = 0.0


@dataclass
class StatisticsReport:
    """Charts data for one time window."""

    window: TimeWindow
    total_customers: int
    category_counts: dict[str, int] = field(default_factory=dict)
    top_products: list[ProductCount] = field(default_factory=list)
