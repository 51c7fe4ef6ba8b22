"""Runtime infrastructure for receiptline.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Settings via load_settings()

Usage:
    from receiptline.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.receipts)
"""

from receiptline.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from receiptline.runtime.paths import (
    ProjectPaths,
    get_paths,
    set_project_root,
)
from receiptline.runtime.settings import Settings, load_settings

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "Settings",
    "load_settings",
    # Paths
    "get_paths",
    "set_project_root",
    "ProjectPaths",
]
