"""Shared pytest fixtures/options for receiptline tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from receiptline.runtime import paths as paths_module
from receiptline.runtime.paths import ProjectPaths
from receiptline.runtime.settings import load_settings


def pytest_addoption(parser):
    """Custom pytest option for receipt e2e tests."""
    parser.addoption(
        "--receiptline-e2e-mode",
        action="store",
        default="cached",
        choices=["cached", "live", "both"],
        help=(
            "Receipt E2E mode for tests/test_e2e_receipts.py: "
            "cached (.ocr.json), live (.jpg -> OCR service), or both."
        ),
    )


@pytest.fixture(autouse=True)
def receipt_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[ProjectPaths]:
    """Point storage at a per-test directory and reset cached settings."""
    monkeypatch.delenv("OCR_SERVICE_URL", raising=False)
    project_paths = ProjectPaths(root=tmp_path / "home")
    monkeypatch.setattr(paths_module, "_paths", project_paths)
    load_settings.cache_clear()
    yield project_paths
    load_settings.cache_clear()
