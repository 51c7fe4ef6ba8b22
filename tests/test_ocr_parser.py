"""Tests for line classification, label stripping and amount normalization."""

import pytest

from receiptline.domain.receipt import LineKind
from receiptline.receipt.ocr_parser import (
    classify_line,
    extract_currency_token,
    normalize_amount,
    normalize_for_matching,
    strip_label,
    type_line,
    type_lines,
)


def test_normalize_for_matching_drops_case_spaces_and_hyphens() -> None:
    assert normalize_for_matching("Sub-Total :") == "subtotal:"
    assert normalize_for_matching("BAL ANCE") == "balance"


@pytest.mark.parametrize(
    ("line", "kind"),
    [
        ("Subtotal $5.48", LineKind.SUBTOTAL),
        ("Sub Total: $5.48", LineKind.SUBTOTAL),
        ("SUB-TOTAL 12.00", LineKind.SUBTOTAL),
        ("Total $6.19", LineKind.TOTAL),
        ("BALANCE DUE 8.76", LineKind.TOTAL),
        ("Item 1 $1.99", LineKind.NORMAL),
        ("Tax $0.71", LineKind.NORMAL),
    ],
)
def test_classify_line(line: str, kind: LineKind) -> None:
    assert classify_line(line) is kind


def test_strip_label_removes_leading_labels_only() -> None:
    assert strip_label("Subtotal: $5.48", LineKind.SUBTOTAL) == "$5.48"
    assert strip_label("Sub-Total = 7.75", LineKind.SUBTOTAL) == "7.75"
    assert strip_label("TOTAL - $6.19", LineKind.TOTAL) == "$6.19"
    assert strip_label("Balance: 8.76", LineKind.TOTAL) == "8.76"
    # Label not at the start: unchanged apart from trimming.
    assert strip_label("  Grand Total 9.00 ", LineKind.TOTAL) == "Grand Total 9.00"
    assert strip_label("  Item 1 ", LineKind.NORMAL) == "Item 1"


def test_type_line_keeps_original_text() -> None:
    typed = type_line("Total: $6.19")

    assert typed.original == "Total: $6.19"
    assert typed.text == "$6.19"
    assert typed.kind is LineKind.TOTAL


def test_type_lines_preserves_order() -> None:
    typed = type_lines(["Store", "Subtotal 5.00", "Total 5.65"])

    assert [t.kind for t in typed] == [LineKind.NORMAL, LineKind.SUBTOTAL, LineKind.TOTAL]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("$7. 02", "7.02"),
        ("12,50", "12.50"),
        ("1.234.56", "1234.56"),
        ("1,234.56", "1234.56"),
        ("$ 1 5", "15"),
        ("Tax $0.71", "0.71"),
        ("abc", ""),
        ("", ""),
        ("$.", ""),
    ],
)
def test_normalize_amount(text: str, expected: str) -> None:
    assert normalize_amount(text) == expected


def test_extract_currency_token_prefers_last_token() -> None:
    assert extract_currency_token("Total $6.19") == "6.19"
    assert extract_currency_token("TOTAL 2 ITEMS $ 12.40") == "12.40"
    assert extract_currency_token("Total 15") == "15"


def test_extract_currency_token_falls_back_to_label_stripped_text() -> None:
    assert extract_currency_token("Total: see attendant") == "see attendant"
    assert extract_currency_token("Balance - due") == "due"
    assert extract_currency_token("Total:") is None
