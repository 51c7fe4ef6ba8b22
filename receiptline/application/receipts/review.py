"""Receipt review workflow orchestration: edits, clearing and deletion."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Literal

from receiptline.receipt.ocr_parser import normalize_amount
from receiptline.runtime.receipt_storage import (
    ReceiptNotFoundError,
    clear_receipt_edits,
    clear_receipts,
    delete_receipt,
    update_receipt_edits,
)

if TYPE_CHECKING:
    from receiptline.domain.receipt import Receipt

EditStatus = Literal[
    "not_found",
    "invalid_amount",
    "updated",
]

DeleteStatus = Literal[
    "not_found",
    "deleted",
]


@dataclass(frozen=True)
class EditReceiptRequest:
    """
    Overrides to apply to one receipt.

    None leaves a field untouched; "" removes that single override.
    clear_date removes the date override.
    """

    receipt_id: str
    store_name: str | None = None
    receipt_date: date | None = None
    clear_date: bool = False
    subtotal: str | None = None
    tax: str | None = None
    total: str | None = None


@dataclass(frozen=True)
class EditReceiptResult:
    """Outcome for editing or clearing one receipt."""

    status: EditStatus
    receipt: Receipt | None = None
    error: str | None = None


@dataclass(frozen=True)
class DeleteReceiptResult:
    """Outcome for deleting receipts."""

    status: DeleteStatus
    removed: int = 0
    error: str | None = None


def _normalize_amount_edit(name: str, value: str | None) -> str | None:
    """Normalize an amount override; raises ValueError for text without digits."""
    if value is None or not value.strip():
        return value
    normalized = normalize_amount(value)
    if not normalized:
        raise ValueError(f"Invalid {name} amount: {value!r}")
    return normalized


def run_edit_receipt(request: EditReceiptRequest) -> EditReceiptResult:
    """Normalize and store user overrides for one receipt."""
    try:
        subtotal = _normalize_amount_edit("subtotal", request.subtotal)
        tax = _normalize_amount_edit("tax", request.tax)
        total = _normalize_amount_edit("total", request.total)
    except ValueError as exc:
        return EditReceiptResult(status="invalid_amount", error=str(exc))

    edits: dict[str, Any] = {
        key: value
        for key, value in {"store_name": request.store_name, "subtotal": subtotal, "tax": tax, "total": total}.items()
        if value is not None
    }
    if request.clear_date:
        edits["date"] = None
    elif request.receipt_date is not None:
        edits["date"] = request.receipt_date

    try:
        receipt = update_receipt_edits(request.receipt_id, **edits)
    except ReceiptNotFoundError as exc:
        return EditReceiptResult(status="not_found", error=str(exc))
    return EditReceiptResult(status="updated", receipt=receipt)


def run_clear_receipt_edits(receipt_id: str) -> EditReceiptResult:
    """Reset all overrides of one receipt."""
    try:
        receipt = clear_receipt_edits(receipt_id)
    except ReceiptNotFoundError as exc:
        return EditReceiptResult(status="not_found", error=str(exc))
    return EditReceiptResult(status="updated", receipt=receipt)


def run_delete_receipt(receipt_id: str) -> DeleteReceiptResult:
    """Delete one receipt."""
    try:
        delete_receipt(receipt_id)
    except ReceiptNotFoundError as exc:
        return DeleteReceiptResult(status="not_found", error=str(exc))
    return DeleteReceiptResult(status="deleted", removed=1)


def run_clear_receipts() -> DeleteReceiptResult:
    """Delete every stored receipt."""
    return DeleteReceiptResult(status="deleted", removed=clear_receipts())
