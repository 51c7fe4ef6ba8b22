"""Receipt scan/import workflow orchestration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from receiptline.receipt.line_assembler import assemble_text_lines
from receiptline.receipt.ocr_helpers import fragments_from_ocr_json
from receiptline.runtime.logging import get_logger
from receiptline.runtime.receipt_pipeline import OCRServiceUnavailable, call_ocr_service, save_ocr_json
from receiptline.runtime.receipt_storage import add_receipt

if TYPE_CHECKING:
    from receiptline.domain.receipt import Receipt, TextFragment

logger = get_logger(__name__)

ScanStatus = Literal[
    "file_not_found",
    "ocr_unavailable",
    "invalid_ocr_json",
    "no_text",
    "stored",
]


@dataclass(frozen=True)
class ReceiptScanRequest:
    """Inputs for running receipt scan workflow."""

    image_path: Path
    ocr_url: str | None = None
    keep_ocr_json: bool = True


@dataclass(frozen=True)
class ReceiptImportRequest:
    """Inputs for importing an OCR JSON file (fragments or raw service output)."""

    ocr_json_path: Path


@dataclass(frozen=True)
class ReceiptScanResult:
    """Outcome from the scan, import and manual entry workflows."""

    status: ScanStatus
    receipt: Receipt | None = None
    lines: list[str] = field(default_factory=list)
    error: str | None = None


def _store_fragments(fragments: list[TextFragment]) -> ReceiptScanResult:
    lines = assemble_text_lines(fragments)
    receipt = add_receipt(lines)
    if receipt is None:
        return ReceiptScanResult(status="no_text", lines=lines)
    return ReceiptScanResult(status="stored", receipt=receipt, lines=lines)


def run_receipt_scan(request: ReceiptScanRequest) -> ReceiptScanResult:
    """Run scan flow: OCR -> assemble lines -> store."""
    if not request.image_path.exists():
        return ReceiptScanResult(
            status="file_not_found",
            error=f"Receipt file not found: {request.image_path}",
        )

    try:
        raw_ocr_result, fragments = call_ocr_service(request.image_path, request.ocr_url)
    except OCRServiceUnavailable as exc:
        return ReceiptScanResult(status="ocr_unavailable", error=str(exc))

    if request.keep_ocr_json:
        save_ocr_json(raw_ocr_result, request.image_path)

    return _store_fragments(fragments)


def run_receipt_import(request: ReceiptImportRequest) -> ReceiptScanResult:
    """Run import flow from a saved OCR JSON file: parse -> assemble -> store."""
    if not request.ocr_json_path.exists():
        return ReceiptScanResult(
            status="file_not_found",
            error=f"OCR JSON not found: {request.ocr_json_path}",
        )

    try:
        data = json.loads(request.ocr_json_path.read_text(encoding="utf-8"))
        fragments = fragments_from_ocr_json(data)
    except ValueError as exc:
        logger.error("Invalid OCR JSON %s: %s", request.ocr_json_path, exc)
        return ReceiptScanResult(status="invalid_ocr_json", error=str(exc))

    return _store_fragments(fragments)


def run_manual_entry(lines: list[str]) -> ReceiptScanResult:
    """Store manually entered lines, bypassing the line assembler."""
    receipt = add_receipt(lines)
    if receipt is None:
        return ReceiptScanResult(status="no_text", lines=list(lines))
    return ReceiptScanResult(status="stored", receipt=receipt, lines=list(receipt.lines))
