"""Storage and retrieval of scanned receipts.

Each receipt is one JSON file named after its id:

    receipts/
    ├── 3f2a...e1.json
    └── 9b0c...77.json

Files hold Receipt.to_dict() output. OCR lines are written once; edit
operations rewrite only the override keys.
"""

import json
from pathlib import Path
from typing import Any

from receiptline.domain.receipt import EmptyReceiptError, Receipt
from receiptline.runtime.logging import get_logger
from receiptline.runtime.paths import get_paths

logger = get_logger(__name__)


class ReceiptNotFoundError(LookupError):
    """Raised when no stored receipt has the requested id."""


def _receipts_dir() -> Path:
    return get_paths().receipts


def _receipt_path(receipt_id: str) -> Path:
    # Ids are uuid hex; reject anything that could escape the directory.
    if not receipt_id or not receipt_id.isalnum():
        raise ReceiptNotFoundError(f"Receipt not found: {receipt_id}")
    return _receipts_dir() / f"{receipt_id}.json"


def ensure_directories() -> None:
    """Create required directories if they don't exist."""
    get_paths().ensure_receipt_directories()


def save_receipt(receipt: Receipt) -> Path:
    """
    Write a receipt to disk, replacing any previous version.

    Returns:
        Path to the saved file
    """
    ensure_directories()
    filepath = _receipt_path(receipt.id)
    tmp_path = filepath.with_suffix(".json.tmp")
    tmp_path.write_text(json.dumps(receipt.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp_path.replace(filepath)
    logger.debug("Saved receipt %s to %s", receipt.id, filepath)
    return filepath


def add_receipt(lines: list[str]) -> Receipt | None:
    """
    Create and store a receipt from recognized lines.

    Returns:
        The new receipt, or None when no non-empty line was given
    """
    try:
        receipt = Receipt.from_lines(lines)
    except EmptyReceiptError:
        logger.info("Skipping receipt with no usable lines")
        return None
    save_receipt(receipt)
    logger.info("Stored receipt %s (%d lines)", receipt.id, len(receipt.lines))
    return receipt


def load_receipt(receipt_id: str) -> Receipt:
    """
    Load one receipt by id.

    Raises:
        ReceiptNotFoundError: if no file exists for the id
    """
    filepath = _receipt_path(receipt_id)
    if not filepath.exists():
        raise ReceiptNotFoundError(f"Receipt not found: {receipt_id}")
    return Receipt.from_dict(json.loads(filepath.read_text(encoding="utf-8")))


def list_receipts() -> list[Receipt]:
    """Load all stored receipts, newest first. Unreadable files are skipped."""
    receipts_dir = _receipts_dir()
    if not receipts_dir.exists():
        return []

    receipts: list[Receipt] = []
    for filepath in sorted(receipts_dir.glob("*.json")):
        try:
            receipts.append(Receipt.from_dict(json.loads(filepath.read_text(encoding="utf-8"))))
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to load receipt %s: %s", filepath.name, e)
    receipts.sort(key=lambda r: r.created_at, reverse=True)
    return receipts


def update_receipt_edits(receipt_id: str, **edits: Any) -> Receipt:
    """
    Apply user overrides to a stored receipt.

    Keys are store_name, date, subtotal, tax and total. Only the given keys
    change; "" or None removes that override. Use clear_receipt_edits() to
    reset them all.

    Raises:
        ReceiptNotFoundError: if no file exists for the id
    """
    receipt = load_receipt(receipt_id)
    receipt.update_edits(**edits)
    save_receipt(receipt)
    logger.info("Updated edits for receipt %s", receipt_id)
    return receipt


def clear_receipt_edits(receipt_id: str) -> Receipt:
    """Reset every override on a stored receipt."""
    receipt = load_receipt(receipt_id)
    receipt.clear_edits()
    save_receipt(receipt)
    logger.info("Cleared edits for receipt %s", receipt_id)
    return receipt


def delete_receipt(receipt_id: str) -> None:
    """
    Remove a stored receipt.

    Raises:
        ReceiptNotFoundError: if no file exists for the id
    """
    filepath = _receipt_path(receipt_id)
    if not filepath.exists():
        raise ReceiptNotFoundError(f"Receipt not found: {receipt_id}")
    filepath.unlink()
    logger.info("Deleted receipt %s", receipt_id)


def clear_receipts() -> int:
    """Remove every stored receipt. Returns how many were removed."""
    receipts_dir = _receipts_dir()
    if not receipts_dir.exists():
        return 0
    removed = 0
    for filepath in receipts_dir.glob("*.json"):
        filepath.unlink()
        removed += 1
    logger.info("Cleared %d receipt(s)", removed)
    return removed
