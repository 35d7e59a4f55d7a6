"""Pydantic DTOs for bulk import results."""

from typing import Any

from pydantic import BaseModel

from crm.application.schemas.customer import CustomerResponse
from crm.domain.entities import ImportReport


class ImportRejectionSchema(BaseModel):
    """One rejected row: where it came from, what it held, and why."""

    line: int | str
    data: dict[str, Any]
    error: str


class ImportReportResponse(BaseModel):
    accepted_count: int
    rejected_count: int
    rejections: list[ImportRejectionSchema]
    accepted: list[CustomerResponse]
    saved: bool = True
    warning: str | None = None

    @classmethod
    def from_entity(cls, report: ImportReport) -> "ImportReportResponse":
        return cls(
            accepted_count=report.accepted_count,
            rejected_count=report.rejected_count,
            rejections=[
                ImportRejectionSchema(line=r.source_ref, data=r.raw_data, error=r.reason)
                for r in report.rejections
            ],
            accepted=[CustomerResponse.from_entity(record) for record in report.accepted],
            saved=report.persistence_error is None,
            warning=str(report.persistence_error) if report.persistence_error else None,
        )
