"""Runtime helpers for the receipt OCR pipeline (non-HTTP)."""

import json
import time
from pathlib import Path
from typing import Any

import httpx

from receiptline.domain.receipt import TextFragment
from receiptline.receipt.ocr_helpers import fragments_from_paddleocr
from receiptline.runtime.logging import get_logger
from receiptline.runtime.paths import get_paths
from receiptline.runtime.settings import load_settings

logger = get_logger(__name__)


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


def request_ocr(image_bytes: bytes, filename: str, ocr_url: str | None = None) -> dict[str, Any]:
    """
    Post image bytes to the OCR service and return its raw JSON result.

    Raises:
        OCRServiceUnavailable: on connection failure or a non-200 response
    """
    settings = load_settings()
    ocr_url = (ocr_url or settings.ocr_service_url).rstrip("/")
    logger.info("Sending receipt to OCR service at %s...", ocr_url)

    try:
        start_time = time.time()
        response = httpx.post(
            f"{ocr_url}/ocr",
            files={"file": (filename, image_bytes, "image/jpeg")},
            timeout=settings.ocr_timeout,
        )
        elapsed_time = time.time() - start_time
        logger.info("OCR service returned in %.2f seconds", elapsed_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e

    if response.status_code != 200:
        logger.error("OCR service error: %s", response.status_code)
        raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")

    return response.json()


def call_ocr_service(receipt_path: Path, ocr_url: str | None = None) -> tuple[dict[str, Any], list[TextFragment]]:
    """
    Call the OCR service for an image file.

    Returns:
        Tuple of (raw_result, fragments).
    """
    raw_result = request_ocr(receipt_path.read_bytes(), receipt_path.name, ocr_url)
    fragments = fragments_from_paddleocr(raw_result, min_confidence=load_settings().min_confidence)
    logger.debug("OCR produced %d fragment(s)", len(fragments))
    return raw_result, fragments


def save_ocr_json(ocr_result: dict[str, Any], receipt_path: Path) -> Path:
    """Save OCR result JSON for debugging."""
    ocr_json_dir = get_paths().receipts_ocr_json
    ocr_json_dir.mkdir(parents=True, exist_ok=True)
    ocr_json_path = ocr_json_dir / f"{receipt_path.stem}.json"
    ocr_json_path.write_text(json.dumps(ocr_result, indent=2))
    logger.debug("OCR JSON saved to: %s", ocr_json_path)
    return ocr_json_path
