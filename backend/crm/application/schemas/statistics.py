"""Pydantic DTOs for dashboard and statistics figures."""

from pydantic import BaseModel

from crm.domain.entities import CATEGORY_LABELS, CustomerCategory, DashboardSummary, StatisticsReport


class ProductCountSchema(BaseModel):
    product: str
    count: int


class CategoryCountSchema(BaseModel):
    category: str
    label: str
    count: int


def _category_rows(counts: dict[str, int]) -> list[CategoryCountSchema]:
    return [
        CategoryCountSchema(
            category=category.value,
            label=CATEGORY_LABELS[category],
            count=counts.get(category.value, 0),
        )
        for category in CustomerCategory
    ]


class DashboardResponse(BaseModel):
    """Overview widgets: totals, popular product, latest activity, charts."""

    total_customers: int
    popular_product: str | None
    recent_activity: str | None
    growth_rate: float
    categories: list[CategoryCountSchema]
    top_products: list[ProductCountSchema]

    @classmethod
    def from_entity(cls, summary: DashboardSummary) -> "DashboardResponse":
        return cls(
            total_customers=summary.total_customers,
            popular_product=summary.popular_product,
            recent_activity=summary.recent_activity,
            growth_rate=round(summary.growth_rate, 2),
            categories=_category_rows(summary.category_counts),
            top_products=[ProductCountSchema(product=p.product, count=p.count) for p in summary.top_products],
        )


class StatisticsResponse(BaseModel):
    """Chart data for one time window of the statistics page."""

    window: str
    total_customers: int
    categories: list[CategoryCountSchema]
    top_products: list[ProductCountSchema]

    @classmethod
    def from_entity(cls, report: StatisticsReport) -> "StatisticsResponse":
        return cls(
            window=report.window.value,
            total_customers=report.total_customers,
            categories=_category_rows(report.category_counts),
            top_products=[ProductCountSchema(product=p.product, count=p.count) for p in report.top_products],
        )
