"""View engine — filter, sort and paginate the customer table.

The pure functions recompute the view from whatever collection they are
given. ``CustomerView`` holds the table's current search/sort/page state
and re-evaluates it against the store on every call.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Any

from crm.application.services.customer_store import CustomerStore
from crm.domain.entities import CustomerRecord, Page, SortDirection, SortField

DEFAULT_PAGE_SIZE = 10
MAX_VISIBLE_PAGES = 5


def filter_customers(collection: Iterable[CustomerRecord], search_term: str | None) -> list[CustomerRecord]:
    """Case-insensitive substring search across the visible columns.

    A blank term returns a copy of the whole collection.
    """
    term = (search_term or "").strip().lower()
    if not term:
        return list(collection)

    def matches(record: CustomerRecord) -> bool:
        return (
            term in record.name.lower()
            or term in record.product.lower()
            or term in record.phone
            or term in (record.note or "").lower()
            or term in record.category.value
            or term in record.category_label.lower()
        )

    return [record for record in collection if matches(record)]


def _sort_key(field: SortField):
    def key(record: CustomerRecord) -> Any:
        if field is SortField.TIME:
            return record.updated_at
        if field is SortField.CATEGORY:
            return record.category.value
        value = getattr(record, field.value) or ""
        return value.lower()

    return key


def sort_customers(
    sequence: Iterable[CustomerRecord],
    field: SortField | str,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[CustomerRecord]:
    """Stable sort; records that compare equal keep their relative order."""
    field = SortField(field)
    direction = SortDirection(direction)
    return sorted(sequence, key=_sort_key(field), reverse=direction is SortDirection.DESC)


def total_pages_for(total_items: int, page_size: int) -> int:
    """Number of pages; an empty view still has one (empty) page."""
    return max(1, math.ceil(total_items / page_size))


def paginate(sequence: Sequence[CustomerRecord], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice one 1-based page; out-of-range pages are clamped."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total_items = len(sequence)
    total_pages = total_pages_for(total_items, page_size)
    page = min(max(page, 1), total_pages)

    offset = (page - 1) * page_size
    items = list(sequence[offset : offset + page_size])
    return Page(
        items=items,
        page=page,
        page_size=page_size,
        start_index=offset + 1 if items else 0,
        end_index=offset + len(items),
        total_items=total_items,
        total_pages=total_pages,
    )


def page_window(page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES) -> list[int]:
    """Page numbers for the pager buttons, centred on the current page."""
    start = max(1, page - max_visible // 2)
    end = min(total_pages, start + max_visible - 1)
    if end - start + 1 < max_visible:
        start = max(1, end - max_visible + 1)
    return list(range(start, end + 1))


class CustomerView:
    """Search/sort/page state of the customer table.

    Nothing is cached: every read re-filters and re-sorts the store's
    current contents. Until a sort is chosen the store order (newest first)
    is shown.
    """

    def __init__(self, store: CustomerStore, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._store = store
        self.page_size = page_size
        self.search_term = ""
        self.sort_field: SortField | None = None
        self.sort_direction = SortDirection.DESC
        self.page = 1

    def search(self, term: str | None) -> Page:
        self.search_term = (term or "").strip()
        self.page = 1
        return self.current_page()

    def clear_filters(self) -> Page:
        return self.search("")

    def sort_by(self, field: SortField | str, direction: SortDirection | str | None = None) -> Page:
        """Sort by ``field``; without a direction, clicking the active column toggles it."""
        field = SortField(field)
        if direction is not None:
            self.sort_direction = SortDirection(direction)
        elif field is self.sort_field:
            self.sort_direction = self.sort_direction.toggled()
        else:
            self.sort_direction = SortDirection.ASC
        self.sort_field = field
        self.page = 1
        return self.current_page()

    def rows(self) -> list[CustomerRecord]:
        """Filtered and sorted rows, unpaginated (what export writes out)."""
        rows = filter_customers(self._store.all(), self.search_term)
        if self.sort_field is not None:
            rows = sort_customers(rows, self.sort_field, self.sort_direction)
        return rows

    def total_pages(self) -> int:
        return total_pages_for(len(self.rows()), self.page_size)

    def current_page(self) -> Page:
        page = paginate(self.rows(), self.page, self.page_size)
        # The view may have shrunk since the last call (e.g. after a delete).
        self.page = page.page
        return page

    def go_to_page(self, page: int) -> bool:
        """Move to ``page``; pages outside 1..total_pages are refused."""
        if not 1 <= page <= self.total_pages():
            return False
        self.page = page
        return True

    def first(self) -> bool:
        return self.go_to_page(1)

    def previous(self) -> bool:
        return self.go_to_page(self.page - 1)

    def next(self) -> bool:
        return self.go_to_page(self.page + 1)

    def last(self) -> bool:
        return self.go_to_page(self.total_pages())
