"""Domain entity for the activity log — one entry per store mutation."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from collections.abc import Mapping
from typing import Any


class ActivityAction:
    """Short action labels written by the customer store."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    IMPORTED = "imported"


ACTION_LABELS: dict[str, str] = {
    ActivityAction.CREATED: "Thêm khách hàng mới",
    ActivityAction.UPDATED: "Cập nhật khách hàng",
    ActivityAction.DELETED: "Xóa khách hàng",
    ActivityAction.IMPORTED: "Nhập dữ liệu",
}


@dataclass(frozen=True)
class ActivityEntry:
    """Immutable record of something that happened to the customer list."""

    action: str
    description: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def label(self) -> str:
        return ACTION_LABELS.get(self.action, self.action)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, blob: dict[str, Any]) -> "ActivityEntry":
        if not isinstance(blob, Mapping) or not isinstance(blob["action"], str):
            raise TypeError(f"Not an activity entry: {blob!r}")
        timestamp = datetime.fromisoformat(blob["timestamp"])
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            action=blob["action"],
            description=str(blob.get("description") or ""),
            timestamp=timestamp,
        )
