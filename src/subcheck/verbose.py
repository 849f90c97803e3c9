"""Debug log configuration for the pytest plugin."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_configured: set[str] = set()


def setup_logger(debug_file: Path, verbose: bool = False, logger_name: str = "subcheck") -> logging.Logger:
    """
    Configure and return a logger for debug output.

    Always writes to debug_file. Optionally also writes to stderr if verbose=True.

    Args:
        debug_file: Path to debug log file (always created)
        verbose: If True, also log to stderr. If False, only log to file.
        logger_name: Name of the logger instance. Each name can be set up once.

    Returns:
        Configured logger instance.

    Raises:
        RuntimeError: If a logger with this name was already set up.
    """
    logger = logging.getLogger(logger_name)
    if logger_name in _configured and logger.handlers:
        raise RuntimeError(f"Logger '{logger_name}' already exists, use a unique logger name")

    logger.handlers.clear()
    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S"
    )

    debug_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(debug_file, mode='a')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    _configured.add(logger_name)
    return logger


def teardown_logger(logger_name: str = "subcheck") -> None:
    """Close the handlers of a logger set up by :func:`setup_logger`."""
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    _configured.discard(logger_name)
