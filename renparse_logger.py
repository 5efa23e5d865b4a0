# -*- coding: utf-8 -*-
"""
RenParse Central Logging Module

Standard logging configuration for the whole package.
Handlers are only configured on the root 'renparse' logger.
Child loggers propagate to root and do not add handlers themselves.
"""

import logging
import os
from pathlib import Path
from datetime import datetime

# Log directory (only created when file logging is enabled)
LOG_DIR = Path.home() / ".renparse" / "logs"
LOG_FILE = LOG_DIR / f"renparse_{datetime.now().strftime('%Y%m%d')}.log"
LOG_TO_FILE = os.environ.get("RENPARSE_LOG_TO_FILE", "") == "1"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_root_configured = False


def _configure_root_logger():
    """Configure the root 'renparse' logger with handlers (once only)."""
    global _root_configured
    if _root_configured:
        return

    root_logger = logging.getLogger("renparse")
    root_logger.setLevel(logging.DEBUG)

    # Prevent propagation to Python's root logger to avoid duplicates
    root_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if LOG_TO_FILE:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root_logger.addHandler(file_handler)

    _root_configured = True


def set_console_level(level: int):
    """
    Change the level of the console handler(s) on the root logger.

    Used by the CLI for --verbose.
    """
    _configure_root_logger()
    for handler in logging.getLogger("renparse").handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)


_configure_root_logger()
logger = logging.getLogger("renparse")


def get_logger(name: str) -> logging.Logger:
    """
    Return a child logger for a module.

    Child loggers do NOT add handlers - they propagate to the root 'renparse' logger.

    Args:
        name: Module name

    Returns:
        Logger named renparse.{name}
    """
    _configure_root_logger()
    return logging.getLogger(f"renparse.{name}")
