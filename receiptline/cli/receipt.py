"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from receiptline.runtime import get_logger

if TYPE_CHECKING:
    from receiptline.application.receipts.scan import ReceiptScanResult

logger = get_logger(__name__)


def _read_text_lines(source: str) -> list[str]:
    if source == "-":
        return sys.stdin.read().splitlines()
    path = Path(source)
    if not path.exists():
        print(f"Error: file not found: {path}")
        sys.exit(1)
    return path.read_text(encoding="utf-8").splitlines()


def _print_stored(result: "ReceiptScanResult") -> None:
    from receiptline.receipt.formatter import format_receipt

    if result.status == "file_not_found":
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)
    if result.status == "ocr_unavailable":
        logger.error("%s", result.error)
        print(f"OCR service unavailable: {result.error}")
        print("Make sure the OCR service is running before scanning receipts.")
        sys.exit(1)
    if result.status == "invalid_ocr_json":
        print(f"Invalid OCR JSON: {result.error}")
        sys.exit(1)
    if result.status == "no_text" or result.receipt is None:
        print("No text found; nothing stored.")
        sys.exit(1)

    receipt = result.receipt
    print("=" * 60)
    print(format_receipt(receipt))
    print("=" * 60)
    print(f"Stored receipt {receipt.id} ({len(receipt.lines)} lines)")


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server."""
    import uvicorn

    from receiptline.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def cmd_scan(args: argparse.Namespace) -> None:
    """Scan a receipt image through the OCR service and store it."""
    from receiptline.application.receipts.scan import ReceiptScanRequest, run_receipt_scan

    result = run_receipt_scan(
        ReceiptScanRequest(
            image_path=Path(args.image),
            ocr_url=args.ocr_url,
            keep_ocr_json=not args.no_ocr_json,
        )
    )
    _print_stored(result)


def cmd_import(args: argparse.Namespace) -> None:
    """Import a saved OCR JSON file and store the receipt."""
    from receiptline.application.receipts.scan import ReceiptImportRequest, run_receipt_import

    _print_stored(run_receipt_import(ReceiptImportRequest(ocr_json_path=Path(args.ocr_json))))


def cmd_add(args: argparse.Namespace) -> None:
    """Store manually entered lines from a text file or stdin."""
    from receiptline.application.receipts.scan import run_manual_entry

    _print_stored(run_manual_entry(_read_text_lines(args.source)))


def cmd_lines(args: argparse.Namespace) -> None:
    """Assemble OCR JSON into lines and print them, without storing."""
    from receiptline.receipt.line_assembler import assemble_text_lines
    from receiptline.receipt.ocr_helpers import fragments_from_ocr_json

    path = Path(args.ocr_json)
    if not path.exists():
        print(f"Error: OCR JSON not found: {path}")
        sys.exit(1)
    try:
        fragments = fragments_from_ocr_json(json.loads(path.read_text(encoding="utf-8")))
    except ValueError as e:
        print(f"Invalid OCR JSON: {e}")
        sys.exit(1)
    for line in assemble_text_lines(fragments):
        print(line)


def cmd_extract(args: argparse.Namespace) -> None:
    """Extract fields from plain-text lines, without storing."""
    from receiptline.receipt.ocr_parser import extract_fields

    fields = extract_fields(_read_text_lines(args.source))
    print(f"Store:    {fields.store_name}")
    print(f"Date:     {fields.date.isoformat() if fields.date else 'UNKNOWN'}")
    print(f"Subtotal: {fields.subtotal or 'N/A'}")
    print(f"Tax:      {fields.tax or 'N/A'}")
    print(f"Total:    {fields.total or 'N/A'}")


def cmd_list(args: argparse.Namespace) -> None:
    """List stored receipts, newest first."""
    from receiptline.application.receipts.listing import run_list_receipts

    receipts = run_list_receipts().receipts
    if not receipts:
        print("No receipts yet")
        return

    print(f"\nReceipts ({len(receipts)}):")
    print("-" * 60)
    for summary in receipts:
        total = f"${summary.total}" if summary.total else ""
        edited = " *" if summary.is_edited else ""
        print(f"  {summary.id}  {summary.created_at:%Y-%m-%d %H:%M}  {summary.title[:30]:<30} {total:>10}{edited}")
    print("-" * 60)


def cmd_show(args: argparse.Namespace) -> None:
    """Show one receipt with resolved fields."""
    from receiptline.application.receipts.listing import run_show_receipt
    from receiptline.receipt.formatter import format_receipt

    receipt = run_show_receipt(args.receipt_id)
    if receipt is None:
        print(f"Receipt not found: {args.receipt_id}")
        sys.exit(1)
    print(format_receipt(receipt, show_lines=args.all_lines))


def cmd_edit(args: argparse.Namespace) -> None:
    """Set user overrides on a receipt."""
    from receiptline.application.receipts.review import EditReceiptRequest, run_edit_receipt
    from receiptline.receipt.formatter import format_receipt

    receipt_date = None
    if args.date:
        try:
            receipt_date = date.fromisoformat(args.date)
        except ValueError:
            print(f"Invalid date (expected YYYY-MM-DD): {args.date}")
            sys.exit(1)

    result = run_edit_receipt(
        EditReceiptRequest(
            receipt_id=args.receipt_id,
            store_name=args.store_name,
            receipt_date=receipt_date,
            clear_date=args.clear_date,
            subtotal=args.subtotal,
            tax=args.tax,
            total=args.total,
        )
    )
    if result.status != "updated" or result.receipt is None:
        print(result.error or "Edit failed.")
        sys.exit(1)
    print(format_receipt(result.receipt))


def cmd_clear_edits(args: argparse.Namespace) -> None:
    """Reset all overrides on a receipt."""
    from receiptline.application.receipts.review import run_clear_receipt_edits

    result = run_clear_receipt_edits(args.receipt_id)
    if result.status != "updated":
        print(result.error)
        sys.exit(1)
    print(f"Cleared edits for {args.receipt_id}")


def cmd_delete(args: argparse.Namespace) -> None:
    """Delete one receipt."""
    from receiptline.application.receipts.review import run_delete_receipt

    result = run_delete_receipt(args.receipt_id)
    if result.status != "deleted":
        print(result.error)
        sys.exit(1)
    print(f"Deleted {args.receipt_id}")


def cmd_clear(args: argparse.Namespace) -> None:
    """Delete every stored receipt."""
    from receiptline.application.receipts.review import run_clear_receipts

    if not args.yes:
        choice = input("Clear all history? This removes all scanned receipts. [y/N] ").strip().lower()
        if choice not in {"y", "yes"}:
            print("Cancelled.")
            return
    result = run_clear_receipts()
    print(f"Removed {result.removed} receipt(s)")
