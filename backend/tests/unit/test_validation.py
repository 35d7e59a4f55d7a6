"""Unit tests for candidate validation and import-row normalization."""

import pytest

from crm.application.services.validation import (
    MSG_CATEGORY_INVALID,
    MSG_NAME_REQUIRED,
    MSG_PHONE_INVALID,
    MSG_PHONE_REQUIRED,
    MSG_PRODUCT_REQUIRED,
    find_phone_collision,
    is_valid_phone,
    is_well_formed,
    normalize_import_row,
    validate_candidate,
)
from crm.domain.entities import CustomerRecord


@pytest.mark.parametrize(
    "phone",
    ["0312345678", "0512345678", "0712345678", "0812345678", "0912345678"],
)
def test_valid_mobile_prefixes(phone: str):
    assert is_valid_phone(phone)


@pytest.mark.parametrize(
    "phone",
    [
        "",
        "0212345678",   # 2 is not a mobile prefix
        "091234567",    # 9 digits
        "09123456789",  # 11 digits
        "9123456789",   # no leading zero
        "09123abc78",
        " 0912345678",  # callers trim; we do not
    ],
)
def test_invalid_phones(phone: str):
    assert not is_valid_phone(phone)


def test_validate_candidate_reports_every_missing_field():
    result = validate_candidate({"name": "", "product": "", "phone": ""})

    assert result.valid is False
    assert result.field_errors == {
        "name": MSG_NAME_REQUIRED,
        "product": MSG_PRODUCT_REQUIRED,
        "phone": MSG_PHONE_REQUIRED,
    }


def test_validate_candidate_flags_malformed_phone_and_category():
    result = validate_candidate(
        {"name": "An", "product": "Gói A", "phone": "12345", "category": "gold"}
    )

    assert result.field_errors == {
        "phone": MSG_PHONE_INVALID,
        "category": MSG_CATEGORY_INVALID,
    }


def test_category_is_optional():
    assert is_well_formed({"name": "An", "product": "Gói A", "phone": "0912345678"})
    assert is_well_formed(
        {"name": "An", "product": "Gói A", "phone": "0912345678", "category": "VIP"}
    )


def test_find_phone_collision_exact_match_and_exclusion():
    a = CustomerRecord(name="A", product="P", phone="0912345678")
    b = CustomerRecord(name="B", product="P", phone="0987654321")

    assert find_phone_collision([a, b], "0987654321") is b
    assert find_phone_collision([a, b], "098765432") is None
    assert find_phone_collision([a, b], "0987654321", exclude_id=b.id) is None


def test_normalize_maps_english_headers_case_insensitively():
    row = normalize_import_row(
        {" Name ": " An ", "PRODUCT": "Gói A", "Phone": "0912345678", "Note": "hi"}
    )

    assert row == {
        "name": "An",
        "product": "Gói A",
        "phone": "0912345678",
        "note": "hi",
        "category": "regular",
    }


def test_normalize_maps_vietnamese_export_headers():
    row = normalize_import_row(
        {
            "STT": 1,
            "Thời Gian": "01/01/2026 10:00:00",
            "Tên Khách Hàng": "Bình",
            "Sản Phẩm": "Gói B",
            "SĐT": "0987654321",
            "Phân Loại": "Tiềm Năng",
            "Ghi Chú": "",
        }
    )

    assert row == {
        "name": "Bình",
        "product": "Gói B",
        "phone": "0987654321",
        "category": "potential",
        "note": "",
    }


def test_normalize_prefers_product_for_product_name_header():
    row = normalize_import_row({"Product Name": "Gói C", "Customer Name": "Chi"})

    assert row["product"] == "Gói C"
    assert row["name"] == "Chi"


def test_normalize_keeps_unknown_category_for_validation_to_reject():
    row = normalize_import_row({"name": "An", "category": "gold"})

    assert row["category"] == "gold"
    assert validate_candidate(row).field_errors["category"] == MSG_CATEGORY_INVALID


def test_normalize_stringifies_numeric_cells():
    row = normalize_import_row({"phone": 912345678})

    assert row["phone"] == "912345678"
