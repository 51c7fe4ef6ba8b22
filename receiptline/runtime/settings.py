"""Runtime loader for receiptline settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from receiptline.runtime.paths import get_paths

DEFAULT_OCR_SERVICE_URL = "http://localhost:8001"
DEFAULT_OCR_TIMEOUT = 60.0
DEFAULT_MIN_CONFIDENCE = 0.5


@dataclass(frozen=True)
class Settings:
    """OCR service settings."""

    ocr_service_url: str = DEFAULT_OCR_SERVICE_URL
    ocr_timeout: float = DEFAULT_OCR_TIMEOUT
    min_confidence: float = DEFAULT_MIN_CONFIDENCE


@lru_cache(maxsize=4)
def load_settings(config_path: str | None = None) -> Settings:
    """
    Load settings from config.toml, then apply environment overrides.

    Example config.toml:

        [ocr]
        service_url = "http://localhost:8001"
        timeout = 60
        min_confidence = 0.5

    Args:
        config_path: Optional TOML path override. If None, uses the default path.

    Returns:
        Settings; missing file or keys fall back to defaults.
        OCR_SERVICE_URL in the environment wins over the file.
    """
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    path = Path(config_path) if config_path is not None else get_paths().config
    ocr: dict = {}
    if path.exists():
        with open(path, "rb") as f:
            ocr = tomllib.load(f).get("ocr", {})

    service_url = os.environ.get("OCR_SERVICE_URL") or ocr.get("service_url", DEFAULT_OCR_SERVICE_URL)
    return Settings(
        ocr_service_url=service_url,
        ocr_timeout=float(ocr.get("timeout", DEFAULT_OCR_TIMEOUT)),
        min_confidence=float(ocr.get("min_confidence", DEFAULT_MIN_CONFIDENCE)),
    )
