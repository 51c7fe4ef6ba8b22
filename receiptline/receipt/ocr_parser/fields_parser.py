"""Store/date/summary amount extraction helpers."""

from collections.abc import Iterable
from datetime import date

from receiptline.domain.receipt import ExtractedFields, LineKind, TypedLine

from ..date_utils import extract_date
from .amounts import normalize_amount
from .classifier import type_lines
from .common import DEFAULT_STORE_NAME, contains_tax_keyword


def _last_amount(texts: Iterable[str]) -> str | None:
    """Normalize each text and return the last non-empty amount."""
    candidates = [amount for amount in (normalize_amount(text) for text in texts) if amount]
    # Receipts often restate a figure; the lowest line is authoritative.
    return candidates[-1] if candidates else None


def _extract_subtotal(typed_lines: list[TypedLine]) -> str | None:
    """Extract subtotal amount."""
    return _last_amount(line.text for line in typed_lines if line.kind is LineKind.SUBTOTAL)


def _extract_total(typed_lines: list[TypedLine]) -> str | None:
    """Extract total amount."""
    return _last_amount(line.text for line in typed_lines if line.kind is LineKind.TOTAL)


def _extract_tax(typed_lines: list[TypedLine]) -> str | None:
    """Extract tax amount from any line that mentions tax, whatever its kind."""
    return _last_amount(line.text for line in typed_lines if contains_tax_keyword(line.text))


def _extract_store_name(lines: list[str]) -> str:
    """First non-empty line, or the fixed fallback label."""
    for line in lines:
        cleaned = line.strip()
        if cleaned:
            return cleaned
    return DEFAULT_STORE_NAME


def _extract_date(lines: list[str]) -> date | None:
    """Extract date from raw lines (returns None if unknown)."""
    return extract_date(lines)


def extract_fields(lines: list[str]) -> ExtractedFields:
    """
    Extract subtotal, tax, total, store name and date from ordered lines.

    Amounts are normalized numeral strings; a field that cannot be found is
    None. The store name falls back to DEFAULT_STORE_NAME.
    """
    lines = list(lines)
    typed_lines = type_lines(lines)
    return ExtractedFields(
        store_name=_extract_store_name(lines),
        subtotal=_extract_subtotal(typed_lines),
        tax=_extract_tax(typed_lines),
        total=_extract_total(typed_lines),
        date=_extract_date(lines),
    )
