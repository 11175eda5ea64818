"""
utils.py

Logging helper shared by the marching squares modules.

The public helper:
- `get_logger(logger=None)` : return an injected logger or the package one

Diagnostics are never raised to the caller; every anomaly in the pipeline
goes through a logger so that tests can capture it with ``caplog`` or an
injected ``logging.Logger``.
"""

from typing import Optional
import logging

from isolines.marching.config import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def get_logger(injected: Optional[logging.Logger] = None) -> logging.Logger:
    """Return ``injected`` when given, else the package logger."""
    if injected is not None:
        return injected
    return logger
