"""Pydantic DTOs (Data Transfer Objects) for the customer feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from crm.domain.entities import CustomerRecord, MutationResult


class CustomerInput(BaseModel):
    """Candidate fields for create and update.

    Deliberately loose: format rules live in the validation service so
    problems come back as field-level messages instead of a 422 from the
    schema layer. Surrounding whitespace is trimmed here.
    """

    name: str = Field("", max_length=200, examples=["Nguyễn Văn An"])
    product: str = Field("", max_length=200, examples=["Gói A"])
    phone: str = Field("", max_length=20, examples=["0912345678"])
    category: str | None = Field(None, examples=["vip"])
    note: str | None = Field("", max_length=2000)

    model_config = {"str_strip_whitespace": True}


class CustomerResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    time: datetime
    name: str
    product: str
    phone: str
    category: str
    category_label: str
    note: str

    @classmethod
    def from_entity(cls, record: CustomerRecord) -> "CustomerResponse":
        return cls(
            id=record.id,
            time=record.updated_at,
            name=record.name,
            product=record.product,
            phone=record.phone,
            category=record.category.value,
            category_label=record.category_label,
            note=record.note,
        )


class CustomerMutationResponse(BaseModel):
    """Outcome of a create/update/delete, with a warning if the save failed."""

    customer: CustomerResponse
    applied: bool = True
    saved: bool = True
    warning: str | None = None

    @classmethod
    def from_result(cls, result: MutationResult) -> "CustomerMutationResponse":
        return cls(
            customer=CustomerResponse.from_entity(result.record),
            applied=result.applied,
            saved=result.saved,
            warning=str(result.persistence_error) if result.persistence_error else None,
        )


class CustomerPageResponse(BaseModel):
    """One page of the filtered and sorted customer table."""

    items: list[CustomerResponse]
    page: int
    page_size: int
    start_index: int
    end_index: int
    total_items: int
    total_pages: int
    has_previous: bool
    has_next: bool
    page_numbers: list[int]
