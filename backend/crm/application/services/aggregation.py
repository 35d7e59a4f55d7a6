"""Aggregates over the customer collection for dashboards and charts.

Everything is recomputed from the collection on each call. Functions that
depend on the calendar take ``now`` explicitly; record timestamps are
converted to ``now``'s timezone before month/quarter/year comparisons.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone

from crm.domain.entities import CustomerCategory, CustomerRecord, ProductCount, TimeWindow

DEFAULT_TOP_PRODUCTS = 5


def total_count(collection: Sequence[CustomerRecord]) -> int:
    return len(collection)


def category_histogram(collection: Iterable[CustomerRecord]) -> dict[str, int]:
    counts = {category.value: 0 for category in CustomerCategory}
    for record in collection:
        category = record.category or CustomerCategory.REGULAR
        counts[category.value] += 1
    return counts


def _product_counts(collection: Iterable[CustomerRecord]) -> Counter[str]:
    # Counter keeps first-insertion order, which is what breaks ties below.
    return Counter(record.product for record in collection)


def popular_product(collection: Iterable[CustomerRecord]) -> str | None:
    """Most frequent product; on a tie the first one met in the collection wins."""
    counts = _product_counts(collection)
    if not counts:
        return None
    best, best_count = None, 0
    for product, count in counts.items():
        if count > best_count:
            best, best_count = product, count
    return best


def top_products(collection: Iterable[CustomerRecord], n: int = DEFAULT_TOP_PRODUCTS) -> list[ProductCount]:
    """Products by descending count; equal counts keep first-seen order."""
    if n <= 0:
        return []
    ranked = sorted(_product_counts(collection).items(), key=lambda item: item[1], reverse=True)
    return [ProductCount(product=product, count=count) for product, count in ranked[:n]]


def _local(ts: datetime, now: datetime) -> datetime:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(now.tzinfo) if now.tzinfo is not None else ts


def _aware(now: datetime) -> datetime:
    return now if now.tzinfo is not None else now.replace(tzinfo=timezone.utc)


def in_window(ts: datetime, window: TimeWindow, now: datetime) -> bool:
    now = _aware(now)
    local = _local(ts, now)

    if window is TimeWindow.LAST_7_DAYS:
        return local >= now - timedelta(days=7)
    if window is TimeWindow.LAST_30_DAYS:
        return local >= now - timedelta(days=30)
    if window is TimeWindow.THIS_MONTH:
        return (local.year, local.month) == (now.year, now.month)
    if window is TimeWindow.THIS_QUARTER:
        quarter_start = now.replace(
            month=(now.month - 1) // 3 * 3 + 1, day=1, hour=0, minute=0, second=0, microsecond=0
        )
        return local >= quarter_start
    if window is TimeWindow.THIS_YEAR:
        return local.year == now.year
    return True


def time_window_filter(
    collection: Iterable[CustomerRecord],
    window: TimeWindow | str,
    now: datetime,
) -> list[CustomerRecord]:
    window = TimeWindow(window)
    return [record for record in collection if in_window(record.updated_at, window, now)]


def _previous_month(year: int, month: int) -> tuple[int, int]:
    return (year - 1, 12) if month == 1 else (year, month - 1)


def growth_rate(collection: Iterable[CustomerRecord], now: datetime) -> float:
    """Month-over-month change in percent; 0 when last month had no records."""
    now = _aware(now)
    this_month = (now.year, now.month)
    last_month = _previous_month(now.year, now.month)

    this_count = last_count = 0
    for record in collection:
        local = _local(record.updated_at, now)
        key = (local.year, local.month)
        if key == this_month:
            this_count += 1
        elif key == last_month:
            last_count += 1

    if last_count == 0:
        return 0.0
    return (this_count - last_count) / last_count * 100
