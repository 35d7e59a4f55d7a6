"""Pydantic DTOs for the activity log."""

from datetime import datetime

from pydantic import BaseModel

from crm.domain.entities import ActivityEntry


class ActivityResponse(BaseModel):
    action: str
    label: str
    description: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, entry: ActivityEntry) -> "ActivityResponse":
        return cls(
            action=entry.action,
            label=entry.label,
            description=entry.description,
            timestamp=entry.timestamp,
        )
