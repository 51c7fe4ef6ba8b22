"""Centralized path management for receiptline.

This module provides a single source of truth for all storage paths.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_home() -> Path:
    """Data root: $RECEIPTLINE_HOME, else ~/.receiptline."""
    env_home = os.environ.get("RECEIPTLINE_HOME")
    if env_home:
        return Path(env_home).expanduser()
    return Path("~/.receiptline").expanduser()


@dataclass
class ProjectPaths:
    """Container for all receiptline paths, computed from one root."""

    root: Path = field(default_factory=_get_home)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    @property
    def config(self) -> Path:
        """Settings TOML file."""
        return self.root / "config.toml"

    @property
    def receipts(self) -> Path:
        """Stored receipt records (one JSON file per receipt)."""
        return self.root / "receipts"

    @property
    def receipts_ocr_json(self) -> Path:
        """Raw OCR results (JSON)."""
        return self.root / "ocr_json"

    def ensure_receipt_directories(self) -> None:
        """Create all receipt-related directories if they don't exist."""
        self.receipts.mkdir(parents=True, exist_ok=True)
        self.receipts_ocr_json.mkdir(parents=True, exist_ok=True)


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def set_project_root(root: Path | str) -> ProjectPaths:
    """Point the singleton at another data root (e.g. from --home)."""
    global _paths
    _paths = ProjectPaths(root=Path(root).expanduser())
    return _paths
