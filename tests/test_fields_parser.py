"""Tests for store/date/summary field extraction from ordered lines."""

from datetime import date

import pytest

from receiptline.receipt.date_utils import extract_date, find_date_in_line
from receiptline.receipt.ocr_parser import DEFAULT_STORE_NAME, extract_fields


def test_extract_fields_from_simple_receipt() -> None:
    fields = extract_fields(
        [
            "Store A",
            "03/14/2024 12:30",
            "Item 1 $1.99",
            "Item 2 $3.49",
            "Subtotal $5.48",
            "Tax $0.71",
            "Total $6.19",
        ]
    )

    assert fields.store_name == "Store A"
    assert fields.date == date(2024, 3, 14)
    assert fields.subtotal == "5.48"
    assert fields.tax == "0.71"
    assert fields.total == "6.19"


def test_last_total_candidate_wins() -> None:
    fields = extract_fields(["Shop", "Total 10.00", "Discount -1.00", "Total 9.00"])

    assert fields.total == "9.00"


def test_subtotal_line_is_never_a_total() -> None:
    fields = extract_fields(["Shop", "Sub Total: $5.48"])

    assert fields.subtotal == "5.48"
    assert fields.total is None


def test_balance_counts_as_total() -> None:
    assert extract_fields(["Shop", "BALANCE DUE $8.76"]).total == "8.76"


def test_total_line_without_digits_is_skipped() -> None:
    fields = extract_fields(["Shop", "Total 4.00", "Total: see attendant"])

    assert fields.total == "4.00"


def test_tax_is_found_on_any_kind_of_line() -> None:
    fields = extract_fields(["Shop", "Total incl. tax 12.00"])

    assert fields.total == "12.00"
    assert fields.tax == "12.00"


def test_missing_fields_are_none() -> None:
    fields = extract_fields(["Corner Shop", "Bread 2.50"])

    assert fields.store_name == "Corner Shop"
    assert fields.subtotal is None
    assert fields.tax is None
    assert fields.total is None
    assert fields.date is None


def test_store_name_skips_blank_lines_and_falls_back() -> None:
    assert extract_fields(["", "   ", " Bakery "]).store_name == "Bakery"
    assert extract_fields([]).store_name == DEFAULT_STORE_NAME
    assert extract_fields(["  "]).store_name == DEFAULT_STORE_NAME


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Date: 2024-03-14", date(2024, 3, 14)),
        ("2024/3/4 09:00", date(2024, 3, 4)),
        ("03/14/2024", date(2024, 3, 14)),
        ("14/03/2024", date(2024, 3, 14)),
        ("03-14-2024", date(2024, 3, 14)),
        ("03/04/2024", date(2024, 3, 4)),
        ("03/14/24", date(2024, 3, 14)),
        ("Jan 5, 2025", date(2025, 1, 5)),
        ("SEPT. 9 2023", date(2023, 9, 9)),
        ("December 25, 2022", date(2022, 12, 25)),
    ],
)
def test_find_date_in_line(line: str, expected: date) -> None:
    assert find_date_in_line(line) == expected


def test_unparseable_date_shape_is_ignored() -> None:
    assert find_date_in_line("13/13/2024") is None
    assert find_date_in_line("Item 3.99") is None


def test_extract_date_takes_first_line_with_a_date() -> None:
    lines = ["Shop", "99/99/2024", "2024-01-02", "2024-05-06"]

    assert extract_date(lines) == date(2024, 1, 2)


def test_last_subtotal_candidate_wins() -> None:
    assert extract_fields(["Subtotal $5.00", "Subtotal $5.48"]).subtotal == "5.48"


def test_leftmost_date_in_a_line_wins() -> None:
    assert find_date_in_line("Jan 5, 2024 02/03/2024") == date(2024, 1, 5)
    assert find_date_in_line("02/03/2024 Jan 5, 2024") == date(2024, 2, 3)
    assert find_date_in_line("Due 13/13/2024 paid 2024-01-09") == date(2024, 1, 9)
