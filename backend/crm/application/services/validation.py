"""Validation rules for candidate customer records.

Everything here is a pure function. Problems are returned as a
``ValidationResult`` so callers can show field-level messages; nothing is
raised for bad input.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from crm.domain.entities import CustomerCategory, CustomerRecord, ValidationResult

# Vietnamese mobile numbers: 0, then 3/5/7/8/9, then 8 more digits.
PHONE_PATTERN = re.compile(r"0[35789][0-9]{8}")

MSG_NAME_REQUIRED = "Vui lòng nhập tên khách hàng"
MSG_PRODUCT_REQUIRED = "Vui lòng nhập sản phẩm"
MSG_PHONE_REQUIRED = "Vui lòng nhập số điện thoại"
MSG_PHONE_INVALID = "Số điện thoại không hợp lệ"
MSG_CATEGORY_INVALID = "Phân loại khách hàng không hợp lệ"

# Import header keyword → field. Checked in order, so "product name"
# resolves to product before the generic "name" rule sees it.
_HEADER_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("phone", ("phone", "sđt", "sdt", "điện thoại")),
    ("product", ("product", "sản phẩm")),
    ("category", ("category", "loại")),
    ("note", ("note", "ghi chú")),
    ("name", ("name", "tên")),
)


def is_valid_phone(phone: str) -> bool:
    return bool(phone) and PHONE_PATTERN.fullmatch(phone) is not None


def validate_candidate(candidate: Mapping[str, Any]) -> ValidationResult:
    """Check a candidate's required fields, phone format and category."""
    errors: dict[str, str] = {}

    if not candidate.get("name"):
        errors["name"] = MSG_NAME_REQUIRED
    if not candidate.get("product"):
        errors["product"] = MSG_PRODUCT_REQUIRED

    phone = candidate.get("phone") or ""
    if not phone:
        errors["phone"] = MSG_PHONE_REQUIRED
    elif not is_valid_phone(phone):
        errors["phone"] = MSG_PHONE_INVALID

    category = candidate.get("category")
    if category not in (None, "") and CustomerCategory.parse(category) is None:
        errors["category"] = MSG_CATEGORY_INVALID

    return ValidationResult(valid=not errors, field_errors=errors)


def is_well_formed(candidate: Mapping[str, Any]) -> bool:
    return validate_candidate(candidate).valid


def find_phone_collision(
    collection: Iterable[CustomerRecord],
    phone: str,
    exclude_id: str | None = None,
) -> CustomerRecord | None:
    """Return the record already using ``phone`` (exact match), if any."""
    for record in collection:
        if record.phone == phone and record.id != exclude_id:
            return record
    return None


def normalize_import_row(raw: Mapping[str, Any]) -> dict[str, str]:
    """Map a free-form import row onto the customer fields.

    Header keys may use any casing and English or Vietnamese wording
    ("Tên Khách Hàng", "SĐT", "Phân Loại"). Unrecognised columns such as
    "STT" are dropped. The first non-empty column wins for each field.
    """
    normalized: dict[str, str] = {}

    for key, value in raw.items():
        if value is None:
            continue
        header = str(key).strip().lower()
        text = str(value).strip()
        if not text:
            continue

        for field_name, keywords in _HEADER_RULES:
            if any(keyword in header for keyword in keywords):
                normalized.setdefault(field_name, text)
                break

    category = normalized.get("category")
    if not category:
        normalized["category"] = CustomerCategory.REGULAR.value
    else:
        parsed = CustomerCategory.parse(category)
        if parsed is not None:
            normalized["category"] = parsed.value

    normalized.setdefault("note", "")
    return normalized
