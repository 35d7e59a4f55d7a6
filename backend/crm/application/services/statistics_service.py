"""Statistics service — dashboard widgets and time-windowed chart data."""

from collections.abc import Callable
from datetime import datetime

from crm.application.services import aggregation
from crm.application.services.activity_log import ActivityLog, utc_now
from crm.application.services.customer_store import CustomerStore
from crm.domain.entities import DashboardSummary, StatisticsReport, TimeWindow


class StatisticsService:
    """Read-only figures over the store and the activity log.

    ``clock`` decides what "now" means for the calendar windows; give it a
    timezone-aware clock in the timezone the months should follow.
    """

    def __init__(
        self,
        store: CustomerStore,
        activity_log: ActivityLog,
        clock: Callable[[], datetime] = utc_now,
        top_products_limit: int = aggregation.DEFAULT_TOP_PRODUCTS,
    ):
        self._store = store
        self._activity_log = activity_log
        self._clock = clock
        self._top_products_limit = top_products_limit

    def dashboard(self) -> DashboardSummary:
        customers = self._store.all()
        latest = self._activity_log.latest()
        return DashboardSummary(
            total_customers=aggregation.total_count(customers),
            popular_product=aggregation.popular_product(customers),
            recent_activity=latest.label if latest else None,
            category_counts=aggregation.category_histogram(customers),
            top_products=aggregation.top_products(customers, self._top_products_limit),
            growth_rate=aggregation.growth_rate(customers, self._clock()),
        )

    def report(self, window: TimeWindow | str = TimeWindow.ALL) -> StatisticsReport:
        window = TimeWindow(window)
        customers = aggregation.time_window_filter(self._store.all(), window, self._clock())
        return StatisticsReport(
            window=window,
            total_customers=aggregation.total_count(customers),
            category_counts=aggregation.category_histogram(customers),
            top_products=aggregation.top_products(customers, self._top_products_limit),
        )
