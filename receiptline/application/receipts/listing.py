"""Receipt listing workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from receiptline.domain.receipt import Receipt
from receiptline.receipt.formatter import summary_total
from receiptline.receipt.ocr_parser import extract_fields
from receiptline.runtime.receipt_storage import ReceiptNotFoundError, list_receipts, load_receipt


@dataclass(frozen=True)
class ReceiptSummary:
    """One history row: title, timestamp and compact total."""

    id: str
    title: str
    created_at: datetime
    total: str | None
    is_edited: bool


@dataclass(frozen=True)
class ReceiptListing:
    """Stored receipt summaries, newest first."""

    receipts: list[ReceiptSummary]


def summarize_receipt(receipt: Receipt) -> ReceiptSummary:
    title = receipt.edited_store_name or extract_fields(list(receipt.lines)).store_name
    return ReceiptSummary(
        id=receipt.id,
        title=title,
        created_at=receipt.created_at,
        total=summary_total(receipt),
        is_edited=receipt.is_edited,
    )


def run_list_receipts() -> ReceiptListing:
    """Load receipt summaries for display."""
    return ReceiptListing(receipts=[summarize_receipt(receipt) for receipt in list_receipts()])


def run_show_receipt(receipt_id: str) -> Receipt | None:
    """Load one receipt, or None if it does not exist."""
    try:
        return load_receipt(receipt_id)
    except ReceiptNotFoundError:
        return None
