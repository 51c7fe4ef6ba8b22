"""Shared constants and helpers for OCR receipt parsing."""

import re

# Fallback store name when a receipt has no usable line
DEFAULT_STORE_NAME = "Receipt"

# Keywords matched against normalize_for_matching() output
SUBTOTAL_KEYWORD = "subtotal"
TOTAL_KEYWORDS = ("total", "balance")
TAX_KEYWORD = "tax"

# Leading label patterns removed from summary lines.
# Separators after the label: ":", "-", "=" and whitespace.
SUBTOTAL_LABEL_PATTERN = r"^\s*sub[\s-]*total[\s:=-]*"
TOTAL_LABEL_PATTERN = r"^\s*(?:total|balance)[\s:=-]*"


def normalize_for_matching(text: str) -> str:
    """Lowercase and drop spaces/hyphens so "Sub-Total" matches "subtotal"."""
    return re.sub(r"[ -]", "", text.lower())


def contains_tax_keyword(text: str) -> bool:
    """Return True if the text mentions tax, ignoring spacing and hyphens."""
    return TAX_KEYWORD in normalize_for_matching(text)


def is_total_summary_line(text: str) -> bool:
    """Return True for a total line that is not a subtotal line."""
    normalized = normalize_for_matching(text)
    return "total" in normalized and SUBTOTAL_KEYWORD not in normalized
