#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_legacy_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receiptline",
        description="Receipt OCR line assembly and field extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  scan <image>               OCR an image via the OCR service and store it
  import <ocr.json>          Store a receipt from saved OCR JSON
  add <lines.txt|->          Store manually entered lines
  lines <ocr.json>           Print assembled lines (nothing stored)
  extract <lines.txt|->      Print extracted fields (nothing stored)
  list                       List stored receipts
  show <id> [--all-lines]    Show one receipt
  edit <id> [--total ...]    Override extracted fields
  clear-edits <id>           Reset all overrides
  delete <id>                Delete a receipt
  clear [--yes]              Delete all receipts
  serve [--port]             Start the HTTP server

Environment:
  RECEIPTLINE_HOME           Data directory (default: ~/.receiptline)
  RECEIPTLINE_LOG_LEVEL      DEBUG, INFO, WARNING or ERROR
  OCR_SERVICE_URL            OCR service base URL
""",
    )
    parser.add_argument("--home", default=None, help="Data directory (overrides RECEIPTLINE_HOME)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="Scan a receipt image")
    scan_parser.add_argument("image", help="Path to receipt image")
    scan_parser.add_argument("--ocr-url", default=None, help="OCR service URL (default: from settings)")
    scan_parser.add_argument("--no-ocr-json", action="store_true", help="Do not keep the raw OCR JSON")

    import_parser = subparsers.add_parser("import", help="Store a receipt from OCR JSON")
    import_parser.add_argument("ocr_json", help="Fragments JSON or raw OCR service JSON")

    add_parser = subparsers.add_parser("add", help="Store manually entered lines")
    add_parser.add_argument("source", help="Text file with one line per row, or - for stdin")

    lines_parser = subparsers.add_parser("lines", help="Print assembled lines from OCR JSON")
    lines_parser.add_argument("ocr_json", help="Fragments JSON or raw OCR service JSON")

    extract_parser = subparsers.add_parser("extract", help="Print extracted fields from text lines")
    extract_parser.add_argument("source", help="Text file with one line per row, or - for stdin")

    subparsers.add_parser("list", help="List stored receipts")

    show_parser = subparsers.add_parser("show", help="Show one receipt")
    show_parser.add_argument("receipt_id")
    show_parser.add_argument("--all-lines", action="store_true", help="Also print every line with its kind")

    edit_parser = subparsers.add_parser("edit", help="Override extracted fields")
    edit_parser.add_argument("receipt_id")
    edit_parser.add_argument("--store-name", default=None)
    edit_parser.add_argument("--date", default=None, help="YYYY-MM-DD")
    edit_parser.add_argument("--clear-date", action="store_true", help="Remove the date override")
    edit_parser.add_argument("--subtotal", default=None)
    edit_parser.add_argument("--tax", default=None)
    edit_parser.add_argument("--total", default=None)

    clear_edits_parser = subparsers.add_parser("clear-edits", help="Reset all overrides")
    clear_edits_parser.add_argument("receipt_id")

    delete_parser = subparsers.add_parser("delete", help="Delete a receipt")
    delete_parser.add_argument("receipt_id")

    clear_parser = subparsers.add_parser("clear", help="Delete all receipts")
    clear_parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.home:
        from receiptline.runtime.paths import set_project_root

        set_project_root(args.home)

    from receiptline.cli import receipt as commands

    handlers: dict[str, Callable[[argparse.Namespace], None]] = {
        "scan": commands.cmd_scan,
        "import": commands.cmd_import,
        "add": commands.cmd_add,
        "lines": commands.cmd_lines,
        "extract": commands.cmd_extract,
        "list": commands.cmd_list,
        "show": commands.cmd_show,
        "edit": commands.cmd_edit,
        "clear-edits": commands.cmd_clear_edits,
        "delete": commands.cmd_delete,
        "clear": commands.cmd_clear,
        "serve": commands.cmd_serve,
    }
    handler = handlers.get(args.command)
    if handler is None:
        return 1
    return _run_legacy_command(handler, args)


if __name__ == "__main__":
    raise SystemExit(main())
