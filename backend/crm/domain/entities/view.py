"""Domain entities for the derived customer view (filter → sort → page)."""

from dataclasses import dataclass, field
from enum import Enum

from crm.domain.entities.customer import CustomerRecord


class SortField(str, Enum):
    """Columns the customer table can be sorted by."""

    TIME = "time"
    NAME = "name"
    PRODUCT = "product"
    PHONE = "phone"
    CATEGORY = "category"
    NOTE = "note"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass
class Page:
    """One page of the derived view.

    ``start_index`` and ``end_index`` are 1-based positions of the first and
    last item shown ("showing 11–20 of 25"); both are 0 for an empty view.
    """

    items: list[CustomerRecord] = field(default_factory=list)
    page: int = 1
    page_size: int = 10
    start_index: int = 0
    end_index: int = 0
    total_items: int = 0
    total_pages: int = 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
