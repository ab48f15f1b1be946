"""Runtime infrastructure for kassenbon.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Rule table loading via load_vendor_registry(), load_category_table()

Usage:
    from kassenbon.runtime import get_logger, get_paths, load_vendor_registry

    logger = get_logger(__name__)
    registry = load_vendor_registry()
"""

from kassenbon.runtime.category_rules import load_category_table
from kassenbon.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from kassenbon.runtime.paths import ProjectPaths, get_paths, reset_paths
from kassenbon.runtime.vendor_rules import load_vendor_registry

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_vendor_registry",
    "load_category_table",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
