"""FastAPI server exposing receipt scanning, storage and edits."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from receiptline.domain.receipt import Receipt
from receiptline.receipt.formatter import build_receipt_view
from receiptline.receipt.line_assembler import assemble_text_lines
from receiptline.receipt.ocr_helpers import fragments_from_paddleocr, fragments_from_payload
from receiptline.receipt.ocr_parser import normalize_amount
from receiptline.runtime.logging import get_logger
from receiptline.runtime.paths import get_paths
from receiptline.runtime.receipt_storage import (
    ReceiptNotFoundError,
    add_receipt,
    clear_receipt_edits,
    clear_receipts,
    delete_receipt,
    list_receipts,
    load_receipt,
    update_receipt_edits,
)
from receiptline.runtime.settings import load_settings

logger = get_logger(__name__)

_EDIT_KEYS = ("store_name", "date", "subtotal", "tax", "total")
_AMOUNT_KEYS = ("subtotal", "tax", "total")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create receipt directories on startup."""
    get_paths().ensure_receipt_directories()
    yield


app = FastAPI(title="Receipt Organizer", lifespan=lifespan)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


def _receipt_json(receipt: Receipt) -> dict[str, Any]:
    """Stored record plus resolved display values."""
    view = build_receipt_view(receipt)
    return {
        "receipt": receipt.to_dict(),
        "display": {
            "store_name": view.store_name,
            "date": view.date.isoformat(),
            "date_is_extracted": view.date_is_extracted,
            "subtotal": view.subtotal,
            "tax": view.tax,
            "total": view.total,
            "is_edited": view.is_edited,
        },
        "typed_lines": [
            {"original": typed.original, "text": typed.text, "kind": typed.kind.value} for typed in view.typed_lines
        ],
    }


def _created(receipt: Receipt | None) -> JSONResponse:
    if receipt is None:
        return _error("No text lines found", 422)
    return JSONResponse(_receipt_json(receipt), status_code=201)


@app.post("/upload")
async def upload_receipt(request: Request) -> JSONResponse:
    """Receive a receipt image, run OCR and store the assembled lines."""
    form = await request.form()

    file = None
    for value in form.values():
        if hasattr(value, "read"):
            file = value
            break

    if not file:
        return _error("No file found in request", 400)

    filename = getattr(file, "filename", None) or "receipt.jpg"
    contents = await file.read()
    settings = load_settings()
    ocr_url = settings.ocr_service_url.rstrip("/")

    try:
        async with httpx.AsyncClient(timeout=settings.ocr_timeout) as client:
            response = await client.post(
                f"{ocr_url}/ocr",
                files={"file": (Path(filename).name, contents, "image/jpeg")},
            )
    except httpx.RequestError as e:
        logger.error("OCR service unavailable: %s", e)
        return _error("OCR service unavailable", 502)

    if response.status_code != 200:
        logger.error("OCR service error: %s", response.status_code)
        return _error("OCR service error", 502)

    try:
        fragments = fragments_from_paddleocr(response.json(), min_confidence=settings.min_confidence)
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Unexpected OCR service response: %s", e)
        return _error("Invalid OCR service response", 502)
    receipt = add_receipt(assemble_text_lines(fragments))
    if receipt is not None:
        logger.info("Stored uploaded receipt %s from %s", receipt.id, filename)
    return _created(receipt)


@app.post("/receipts/fragments")
async def create_from_fragments(request: Request) -> JSONResponse:
    """Assemble posted OCR fragments into lines and store a receipt."""
    try:
        body = await request.json()
    except ValueError:
        return _error("Invalid JSON body", 400)
    items = body.get("fragments") if isinstance(body, dict) else body
    if not isinstance(items, list):
        return _error("Expected a list of fragments", 400)
    try:
        fragments = fragments_from_payload(items)
    except ValueError as e:
        return _error(str(e), 400)
    return _created(add_receipt(assemble_text_lines(fragments)))


@app.post("/receipts/lines")
async def create_from_lines(request: Request) -> JSONResponse:
    """Store manually entered lines."""
    try:
        body = await request.json()
    except ValueError:
        return _error("Invalid JSON body", 400)
    lines = body.get("lines") if isinstance(body, dict) else body
    if not isinstance(lines, list) or not all(isinstance(line, str) for line in lines):
        return _error("Expected a list of strings", 400)
    return _created(add_receipt(lines))


@app.get("/receipts")
async def get_receipts() -> JSONResponse:
    """List stored receipts, newest first."""
    return JSONResponse({"receipts": [_receipt_json(receipt) for receipt in list_receipts()]})


@app.delete("/receipts")
async def delete_all_receipts() -> JSONResponse:
    """Remove every stored receipt."""
    return JSONResponse({"status": "ok", "removed": clear_receipts()})


@app.get("/receipts/{receipt_id}")
async def get_receipt(receipt_id: str) -> JSONResponse:
    try:
        return JSONResponse(_receipt_json(load_receipt(receipt_id)))
    except ReceiptNotFoundError as e:
        return _error(str(e), 404)


@app.patch("/receipts/{receipt_id}/edits")
async def patch_receipt_edits(receipt_id: str, request: Request) -> JSONResponse:
    """
    Apply user overrides. Keys: store_name, date (YYYY-MM-DD), subtotal, tax, total.

    Omitted keys are left unchanged; "" or null removes that override.
    """
    try:
        body = await request.json()
    except ValueError:
        return _error("Invalid JSON body", 400)
    if not isinstance(body, dict):
        return _error("Expected a JSON object", 400)
    unknown = set(body) - set(_EDIT_KEYS)
    if unknown:
        return _error(f"Unknown edit fields: {', '.join(sorted(unknown))}", 400)

    edits: dict[str, Any] = {key: ("" if value is None else str(value)) for key, value in body.items()}
    for key in _AMOUNT_KEYS:
        value = edits.get(key)
        if value:
            normalized = normalize_amount(str(value))
            if not normalized:
                return _error(f"Invalid {key} amount", 400)
            edits[key] = normalized

    if "date" in edits:
        raw_date = edits["date"]
        try:
            edits["date"] = date.fromisoformat(raw_date) if raw_date else None
        except (TypeError, ValueError):
            return _error("Invalid date, expected YYYY-MM-DD", 400)

    try:
        receipt = update_receipt_edits(receipt_id, **edits)
    except ReceiptNotFoundError as e:
        return _error(str(e), 404)
    return JSONResponse(_receipt_json(receipt))


@app.delete("/receipts/{receipt_id}/edits")
async def delete_receipt_edits(receipt_id: str) -> JSONResponse:
    """Reset all overrides, reverting display to extracted values."""
    try:
        return JSONResponse(_receipt_json(clear_receipt_edits(receipt_id)))
    except ReceiptNotFoundError as e:
        return _error(str(e), 404)


@app.delete("/receipts/{receipt_id}")
async def delete_one_receipt(receipt_id: str) -> JSONResponse:
    try:
        delete_receipt(receipt_id)
    except ReceiptNotFoundError as e:
        return _error(str(e), 404)
    return JSONResponse({"status": "ok"})


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
