"""Composable OCR receipt parser components."""

from .amounts import extract_currency_token, normalize_amount
from .classifier import classify_line, strip_label, type_line, type_lines
from .common import DEFAULT_STORE_NAME, normalize_for_matching
from .fields_parser import extract_fields

__all__ = [
    "DEFAULT_STORE_NAME",
    "classify_line",
    "extract_currency_token",
    "extract_fields",
    "normalize_amount",
    "normalize_for_matching",
    "strip_label",
    "type_line",
    "type_lines",
]
