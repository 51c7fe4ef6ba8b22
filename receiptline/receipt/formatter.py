"""Resolve receipt fields for display and format them as text."""

from dataclasses import dataclass
from datetime import date

from receiptline.domain.receipt import ExtractedFields, Receipt, TypedLine

from .ocr_parser import extract_currency_token, extract_fields, type_lines
from .ocr_parser.common import is_total_summary_line

# Display placeholders when neither an edit nor an extracted value exists
MISSING_AMOUNT = "N/A"
MISSING_TOTAL = "No total found"


@dataclass(frozen=True)
class ReceiptView:
    """Display-ready receipt values plus the raw and typed lines."""

    id: str
    store_name: str
    date: date
    date_is_extracted: bool
    subtotal: str
    tax: str
    total: str
    is_edited: bool
    lines: tuple[str, ...]
    typed_lines: tuple[TypedLine, ...]


def _resolve(edited: str | None, extracted: str | None, placeholder: str) -> str:
    """Edit > extracted value > placeholder."""
    if edited:
        return edited
    if extracted:
        return extracted
    return placeholder


def resolve_store_name(receipt: Receipt, fields: ExtractedFields | None = None) -> str:
    fields = fields or extract_fields(list(receipt.lines))
    return _resolve(receipt.edited_store_name, fields.store_name, fields.store_name)


def resolve_date(receipt: Receipt, fields: ExtractedFields | None = None) -> tuple[date, bool]:
    """
    Return (date, is_extracted).

    Falls back to the receipt's creation day when nothing was edited or found.
    """
    if receipt.edited_date is not None:
        return receipt.edited_date, False
    fields = fields or extract_fields(list(receipt.lines))
    if fields.date is not None:
        return fields.date, True
    return receipt.created_at.date(), False


def resolve_subtotal(receipt: Receipt, fields: ExtractedFields | None = None) -> str:
    fields = fields or extract_fields(list(receipt.lines))
    return _resolve(receipt.edited_subtotal, fields.subtotal, MISSING_AMOUNT)


def resolve_tax(receipt: Receipt, fields: ExtractedFields | None = None) -> str:
    fields = fields or extract_fields(list(receipt.lines))
    return _resolve(receipt.edited_tax, fields.tax, MISSING_AMOUNT)


def resolve_total(receipt: Receipt, fields: ExtractedFields | None = None) -> str:
    fields = fields or extract_fields(list(receipt.lines))
    return _resolve(receipt.edited_total, fields.total, MISSING_TOTAL)


def build_receipt_view(receipt: Receipt) -> ReceiptView:
    """Build the presentation record for a receipt without touching its lines."""
    fields = extract_fields(list(receipt.lines))
    receipt_date, date_is_extracted = resolve_date(receipt, fields)
    return ReceiptView(
        id=receipt.id,
        store_name=resolve_store_name(receipt, fields),
        date=receipt_date,
        date_is_extracted=date_is_extracted,
        subtotal=resolve_subtotal(receipt, fields),
        tax=resolve_tax(receipt, fields),
        total=resolve_total(receipt, fields),
        is_edited=receipt.is_edited,
        lines=receipt.lines,
        typed_lines=tuple(type_lines(list(receipt.lines))),
    )


def summary_total_line(lines: tuple[str, ...] | list[str]) -> str | None:
    """Last line mentioning a total that is not a subtotal."""
    candidates = [line for line in lines if is_total_summary_line(line)]
    return candidates[-1] if candidates else None


def summary_total(receipt: Receipt) -> str | None:
    """Compact total for list rows: the edited total, else the last total line's token."""
    if receipt.edited_total:
        return receipt.edited_total
    line = summary_total_line(receipt.lines)
    if line is None:
        return None
    return extract_currency_token(line)


def format_receipt(receipt: Receipt, show_lines: bool = False) -> str:
    """
    Format a receipt as a plain-text block.

    Args:
        receipt: The receipt to render
        show_lines: Also list every raw line with its detected kind

    Returns:
        Multi-line string, no trailing newline
    """
    view = build_receipt_view(receipt)
    date_str = view.date.isoformat()
    if not view.date_is_extracted and receipt.edited_date is None:
        date_str += " (scanned)"

    out = [
        f"Store:    {view.store_name}",
        f"Date:     {date_str}",
        f"Subtotal: {view.subtotal}",
        f"Tax:      {view.tax}",
        f"Total:    {view.total}",
    ]
    if view.is_edited:
        out.append("(edited)")

    if show_lines:
        out.append("")
        out.append("All lines:")
        width = max((len(typed.kind.value) for typed in view.typed_lines), default=0)
        for typed in view.typed_lines:
            out.append(f"  [{typed.kind.value.ljust(width)}] {typed.original}")

    return "\n".join(out)
