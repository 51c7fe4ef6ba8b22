"""Core domain models for receiptline.

This module provides the data models shared by the line assembler,
the field extractor and the runtime adapters:
- BoundingBox, TextFragment, LogicalLine: OCR input and assembled rows
- LineKind, TypedLine, ExtractedFields: field extraction results
- Receipt: the stored aggregate with user overrides

Usage:
    from receiptline.domain import Receipt, TextFragment
"""

from receiptline.domain.receipt import (
    EDIT_FIELDS,
    BoundingBox,
    EmptyReceiptError,
    ExtractedFields,
    LineKind,
    LogicalLine,
    Receipt,
    TextFragment,
    TypedLine,
)

__all__ = [
    "EDIT_FIELDS",
    "BoundingBox",
    "EmptyReceiptError",
    "ExtractedFields",
    "LineKind",
    "LogicalLine",
    "Receipt",
    "TextFragment",
    "TypedLine",
]
