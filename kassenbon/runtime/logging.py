"""Centralized logging configuration for kassenbon.

Usage:
    from kassenbon.runtime import get_logger
    logger = get_logger(__name__)

    logger.debug("Pipeline stage details")
    logger.warning("Absorbed parser anomaly")

Log lines name the module relative to the package, e.g.
``WARNING [receipt.ocr_parser.items_two_column] ...``.

Environment variables:
    KASSENBON_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
    KASSENBON_LOG_FILE: Append log lines to this file instead of stderr
"""

import logging
import os
import sys
from pathlib import Path

LOG_LEVEL_ENV_VAR = "KASSENBON_LOG_LEVEL"
LOG_FILE_ENV_VAR = "KASSENBON_LOG_FILE"
LOGGER_NAMESPACE = "kassenbon"

# Default log level, can be overridden by environment variable
DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(module_path)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(module_path)s.%(funcName)s:%(lineno)d] %(message)s"

_logging_configured = False


class ModulePathFormatter(logging.Formatter):
    """Formatter that exposes the logger name without the kassenbon prefix as ``module_path``."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = f"{LOGGER_NAMESPACE}."
        record.module_path = record.name[len(prefix) :] if record.name.startswith(prefix) else record.name
        return super().format(record)


def _formatter_for(level: int) -> logging.Formatter:
    return ModulePathFormatter(LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT)


def _level_from_env() -> int:
    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper()
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
    }
    return level_map.get(env_level, DEFAULT_LOG_LEVEL)


def _build_handler() -> logging.Handler:
    """stderr by default; a file when KASSENBON_LOG_FILE is set."""
    log_file = os.environ.get(LOG_FILE_ENV_VAR)
    if log_file:
        return logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
    return logging.StreamHandler(sys.stderr)


def configure_logging(level: int | None = None) -> None:
    """Install one handler on the kassenbon namespace logger.

    Args:
        level: Log level to use. If None, reads from KASSENBON_LOG_LEVEL
               or uses DEFAULT_LOG_LEVEL.
    """
    global _logging_configured

    if _logging_configured:
        return

    if level is None:
        level = _level_from_env()

    handler = _build_handler()
    handler.setFormatter(_formatter_for(level))

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(level)
    namespace_logger.addHandler(handler)
    namespace_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the kassenbon namespace.

    Args:
        name: Module name, typically __name__
    """
    configure_logging()

    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the log level at runtime, switching to the DEBUG format when needed.

    Args:
        level: New log level (e.g., logging.DEBUG)
    """
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.setFormatter(_formatter_for(level))
