"""Domain entity — the customer record and its category."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from collections.abc import Mapping
from typing import Any
from uuid import uuid4


class CustomerCategory(str, Enum):
    """Customer classification shown as a badge next to each record."""

    REGULAR = "regular"
    VIP = "vip"
    POTENTIAL = "potential"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> "CustomerCategory | None":
        """Resolve an enum value or display label, in any casing.

        Returns ``None`` for anything that is neither.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = str(value).strip().lower()
        for category in cls:
            if text in (category.value, CATEGORY_LABELS[category].lower()):
                return category
        return None


CATEGORY_LABELS: dict[CustomerCategory, str] = {
    CustomerCategory.REGULAR: "Thường",
    CustomerCategory.VIP: "VIP",
    CustomerCategory.POTENTIAL: "Tiềm Năng",
}


@dataclass
class CustomerRecord:
    """Core domain entity: one customer in the canonical collection.

    The record carries a single timestamp that is refreshed on every create
    or update; there is no separate creation time.
    """

    name: str
    product: str
    phone: str
    category: CustomerCategory = CustomerCategory.REGULAR
    note: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def category_label(self) -> str:
        return self.category.label

    def replace_fields(
        self,
        *,
        name: str,
        product: str,
        phone: str,
        category: CustomerCategory,
        note: str,
        timestamp: datetime,
    ) -> None:
        """Overwrite every field except ``id`` and refresh the timestamp."""
        self.name = name
        self.product = product
        self.phone = phone
        self.category = category
        self.note = note
        self.updated_at = timestamp

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the storage blob layout."""
        return {
            "id": self.id,
            "time": self.updated_at.isoformat(),
            "name": self.name,
            "product": self.product,
            "phone": self.phone,
            "category": self.category.value,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, blob: dict[str, Any]) -> "CustomerRecord":
        """Rebuild a record from a storage blob.

        Raises:
            KeyError: a required key is missing.
            TypeError: the blob is not a mapping, or a text field is not a string.
            ValueError: the timestamp or category cannot be parsed.
        """
        if not isinstance(blob, Mapping):
            raise TypeError(f"Expected a mapping, got {type(blob).__name__}")
        for key in ("name", "product", "phone"):
            if not isinstance(blob[key], str):
                raise TypeError(f"Field {key!r} must be a string, got {type(blob[key]).__name__}")

        category = CustomerCategory.parse(blob.get("category") or CustomerCategory.REGULAR)
        if category is None:
            raise ValueError(f"Unknown category {blob.get('category')!r}")

        updated_at = datetime.fromisoformat(blob["time"])
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)

        if blob.get("id") in (None, ""):
            raise ValueError("Stored record has no id")

        return cls(
            id=str(blob["id"]),
            updated_at=updated_at,
            name=blob["name"],
            product=blob["product"],
            phone=blob["phone"],
            category=category,
            note=str(blob.get("note") or ""),
        )
