"""Receipt workflows."""

from receiptline.application.receipts.listing import (
    ReceiptSummary,
    run_list_receipts,
    run_show_receipt,
    summarize_receipt,
)
from receiptline.application.receipts.review import (
    EditReceiptRequest,
    run_clear_receipt_edits,
    run_clear_receipts,
    run_delete_receipt,
    run_edit_receipt,
)
from receiptline.application.receipts.scan import (
    ReceiptImportRequest,
    ReceiptScanRequest,
    run_manual_entry,
    run_receipt_import,
    run_receipt_scan,
)

__all__ = [
    "EditReceiptRequest",
    "ReceiptImportRequest",
    "ReceiptScanRequest",
    "ReceiptSummary",
    "run_clear_receipt_edits",
    "run_clear_receipts",
    "run_delete_receipt",
    "run_edit_receipt",
    "run_list_receipts",
    "run_manual_entry",
    "run_receipt_import",
    "run_receipt_scan",
    "run_show_receipt",
    "summarize_receipt",
]
