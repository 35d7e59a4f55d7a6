"""SQLAlchemy ORM model for key/value storage entries."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from crm.infrastructure.database.base import Base


class StorageEntryModel(Base):
    """ORM model — maps to the 'storage_entries' table.

    One row per storage key; ``value`` holds the whole persisted list.
    """

    __tablename__ = "storage_entries"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StorageEntryModel(key={self.key}, items={len(self.value or [])})>"
