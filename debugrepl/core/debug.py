"""Logging for debugrepl.

Uses Python's standard logging library.
- INFO/WARNING/ERROR always go to /tmp/debugrepl-{epoch}.log
- DEBUG messages only appear when --debug flag is used

Usage:
    from debugrepl.core import debug as log

    log.debug("Low-level detail - only with --debug")
    log.info("Normal operation info - always logged")
"""

import logging
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Any

_epoch_timestamp = int(time.time())
LOG_FILE = Path(f"/tmp/debugrepl-{_epoch_timestamp}.log")

_logger = logging.getLogger("debugrepl")

_debug_enabled = False

_initialized = False


def _init_logging() -> None:
    """Initialize basic logging (INFO level) to the log file."""
    global _initialized
    if _initialized:
        return

    _initialized = True

    _logger.setLevel(logging.INFO)

    file_handler = logging.FileHandler(LOG_FILE, mode="a", delay=True)
    file_handler.setLevel(logging.DEBUG)  # Handler accepts all, logger filters

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(formatter)
    _logger.addHandler(file_handler)

    # Prevent propagation to root logger (avoids duplicate logs)
    _logger.propagate = False


def enable_debug() -> None:
    """Enable debug-level logging (more verbose output)."""
    global _debug_enabled

    _init_logging()

    _debug_enabled = True
    _logger.setLevel(logging.DEBUG)

    _logger.info("=" * 60)
    _logger.info(f"debugrepl debug session started at {datetime.now()}")
    _logger.info(f"PID: {os.getpid()}")
    _logger.info("=" * 60)


# Initialize logging on module import (for INFO/WARNING/ERROR)
_init_logging()


def get_log_file() -> Path:
    """Get the current session's log file path."""
    return LOG_FILE


def debug(message: str, *args: Any, **kwargs: Any) -> None:
    _logger.debug(message, *args, **kwargs)


def info(message: str, *args: Any, **kwargs: Any) -> None:
    _logger.info(message, *args, **kwargs)


def warning(message: str, *args: Any, **kwargs: Any) -> None:
    _logger.warning(message, *args, **kwargs)


def error(message: str, *args: Any, **kwargs: Any) -> None:
    """Log an error message (always logged to file)."""
    _logger.error(message, *args, **kwargs)


def exception(message: str, *args: Any, **kwargs: Any) -> None:
    """Log an exception with traceback (always logged to file)."""
    _logger.exception(message, *args, **kwargs)


def log_eviction(count: int, capacity: int) -> None:
    """Log entries dropped from the front of a full log (DEBUG only)."""
    _logger.debug(f"EVICT: dropped {count} oldest entries (capacity={capacity})")


def log_console_cleared(dropped: int) -> None:
    """Log a clear of the output log."""
    _logger.info(f"CONSOLE CLEARED: {dropped} entries removed")


def log_evaluation(expression: str, success: bool, value: str = "") -> None:
    """Log an expression evaluation (INFO level, details at DEBUG)."""
    status = "OK" if success else "UNAVAILABLE"
    _logger.info(f"EVALUATE: {status}")

    if _debug_enabled:
        preview = expression[:200] + "..." if len(expression) > 200 else expression
        _logger.debug(f"  Expression: {preview}")
        if len(value) > 500:
            _logger.debug(f"  Value: {value[:500]}...")
        else:
            _logger.debug(f"  Value: {value}")
