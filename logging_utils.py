"""
logging_utils.py

One place to configure logging for the portal.

Public API
----------
- get_logger(name) -> logging.Logger
"""

from __future__ import annotations

import logging
from pathlib import Path

from config import get_log_file, get_log_level

__all__ = ["get_logger"]

_ROOT_NAME = "inventory_portal"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(get_log_level())
    root.propagate = False  # streamlit has its own root handlers

    # Already configured (streamlit reruns import this module again)
    if root.handlers:
        return root

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(sh)

    log_file = get_log_file()
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, mode="a", encoding="utf-8", delay=True)
        fh.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(fh)

    return root


def get_logger(name: str) -> logging.Logger:
    """Return a child of the portal logger, e.g. `inventory_portal.console`."""
    _configure_root()
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
