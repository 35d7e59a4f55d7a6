"""Customer CRUD, search, import and export endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, UploadFile, status

from crm.application.schemas import (
    CustomerInput,
    CustomerMutationResponse,
    CustomerPageResponse,
    CustomerResponse,
    ImportReportResponse,
)
from crm.application.services import CustomerImportService, CustomerStore
from crm.application.services.view_engine import CustomerView, page_window
from crm.config import Settings
from crm.domain.entities import SortDirection, SortField
from crm.domain.exceptions import (
    DuplicatePhoneError,
    ImportSourceError,
    NotFoundError,
    ValidationError,
)
from crm.infrastructure.confirmation import StaticConfirmation
from crm.infrastructure.dependencies import (
    get_customer_store,
    get_import_service,
    get_settings_dependency,
)
from crm.infrastructure.spreadsheet import export_filename, exporter_for, import_source_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["Customers"])


# ── Helpers ──────────────────────────────────────────────────────────

def _validation_error(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": "Dữ liệu không hợp lệ", "field_errors": e.field_errors},
    )


def _duplicate_error(e: DuplicatePhoneError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={
            "message": f"SĐT đã tồn tại cho khách hàng: {e.existing.name}",
            "existing_id": e.existing.id,
        },
    )


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _view(
    store: CustomerStore,
    page_size: int,
    search: str | None,
    sort: SortField | None,
    direction: SortDirection,
) -> CustomerView:
    view = CustomerView(store, page_size)
    view.search(search)
    if sort is not None:
        view.sort_by(sort, direction)
    return view


# ── Collection ───────────────────────────────────────────────────────

@router.get("", response_model=CustomerPageResponse)
def list_customers(
    search: str | None = Query(None, description="Case-insensitive search term"),
    sort: SortField | None = Query(None, description="Column to sort by"),
    direction: SortDirection = Query(SortDirection.ASC),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1, le=100),
    store: CustomerStore = Depends(get_customer_store),
    settings: Settings = Depends(get_settings_dependency),
) -> CustomerPageResponse:
    """Retrieve one page of the filtered, sorted customer table."""
    view = _view(store, page_size or settings.page_size, search, sort, direction)
    if not view.go_to_page(page):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Page {page} is out of range (1-{view.total_pages()})",
        )

    result = view.current_page()
    return CustomerPageResponse(
        items=[CustomerResponse.from_entity(r) for r in result.items],
        page=result.page,
        page_size=result.page_size,
        start_index=result.start_index,
        end_index=result.end_index,
        total_items=result.total_items,
        total_pages=result.total_pages,
        has_previous=result.has_previous,
        has_next=result.has_next,
        page_numbers=page_window(result.page, result.total_pages),
    )


@router.get("/products", response_model=list[str])
def list_products(store: CustomerStore = Depends(get_customer_store)) -> list[str]:
    """Distinct product names, for form autocomplete."""
    return store.products()


@router.get("/export")
def export_customers(
    format: str = Query("csv", pattern="^(csv|xlsx|pdf)$"),
    search: str | None = Query(None),
    sort: SortField | None = Query(None),
    direction: SortDirection = Query(SortDirection.ASC),
    store: CustomerStore = Depends(get_customer_store),
    settings: Settings = Depends(get_settings_dependency),
) -> Response:
    """Download the current filtered/sorted view (all pages) as CSV, XLSX or PDF."""
    exporter = exporter_for(format, settings.tz)
    rows = _view(store, settings.page_size, search, sort, direction).rows()
    content = exporter.export(rows)
    filename = export_filename(exporter, settings.now().date())
    logger.info("Exported %d customers as %s", len(rows), format)
    return Response(
        content=content,
        media_type=exporter.media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportReportResponse)
def import_customers(
    file: UploadFile,
    importer: CustomerImportService = Depends(get_import_service),
) -> ImportReportResponse:
    """Bulk-import customers from an uploaded CSV or XLSX file."""
    content = file.file.read()
    try:
        source = import_source_for(content, file.filename or "upload")
        report = importer.import_from(source)
    except ImportSourceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ImportReportResponse.from_entity(report)


@router.post("", response_model=CustomerMutationResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    data: CustomerInput,
    store: CustomerStore = Depends(get_customer_store),
) -> CustomerMutationResponse:
    """Create a new customer."""
    try:
        result = store.create(data)
    except ValidationError as e:
        raise _validation_error(e)
    except DuplicatePhoneError as e:
        raise _duplicate_error(e)
    return CustomerMutationResponse.from_result(result)


# ── Single customer ──────────────────────────────────────────────────

@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: str,
    store: CustomerStore = Depends(get_customer_store),
) -> CustomerResponse:
    try:
        record = store.get(customer_id)
    except NotFoundError as e:
        raise _not_found(e)
    return CustomerResponse.from_entity(record)


@router.put("/{customer_id}", response_model=CustomerMutationResponse)
def update_customer(
    customer_id: str,
    data: CustomerInput,
    store: CustomerStore = Depends(get_customer_store),
) -> CustomerMutationResponse:
    """Replace every field of an existing customer."""
    try:
        result = store.update(customer_id, data)
    except NotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise _validation_error(e)
    except DuplicatePhoneError as e:
        raise _duplicate_error(e)
    return CustomerMutationResponse.from_result(result)


@router.delete("/{customer_id}", response_model=CustomerMutationResponse)
def delete_customer(
    customer_id: str,
    confirm: bool = Query(False, description="Must be true; the client asks the user first"),
    store: CustomerStore = Depends(get_customer_store),
) -> CustomerMutationResponse:
    """Delete a customer once the client has confirmed it."""
    try:
        result = store.delete(customer_id, StaticConfirmation(confirm))
    except NotFoundError as e:
        raise _not_found(e)
    if not result.applied:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deletion must be confirmed with confirm=true",
        )
    return CustomerMutationResponse.from_result(result)
