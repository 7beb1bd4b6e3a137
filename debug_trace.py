"""
debug_trace.py

Debug instrumentation for tracking down canvas and crash issues.

Tracing is off by default.  Enable it from the ``[debug]`` section of
settings.toml (``configure_from_settings``) or by setting the
SCREENDESIGNER_TRACE environment variable to a non-empty value.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from datetime import datetime
from functools import wraps
from typing import Optional

# Set to True to enable debug tracing
DEBUG_TRACE = bool(os.environ.get("SCREENDESIGNER_TRACE"))

# Set to True to trace paint events (very verbose)
TRACE_PAINT = False

# Log file (None for stderr only)
LOG_FILE: Optional[str] = None

_logger = logging.getLogger("screendesigner.trace")
_logger.propagate = False
_logger.setLevel(logging.DEBUG)

_stream_handler: Optional[logging.Handler] = None
_file_handler: Optional[logging.Handler] = None


def _ensure_handlers() -> None:
    global _stream_handler, _file_handler
    if _stream_handler is None:
        _stream_handler = logging.StreamHandler(sys.stderr)
        _stream_handler.setFormatter(logging.Formatter("%(message)s"))
        _logger.addHandler(_stream_handler)
    if LOG_FILE and _file_handler is None:
        try:
            _file_handler = logging.FileHandler(LOG_FILE, mode="w", encoding="utf-8")
        except OSError as e:
            _logger.warning(f"could not open trace log {LOG_FILE}: {e}")
            return
        _file_handler.setFormatter(logging.Formatter("%(message)s"))
        _logger.addHandler(_file_handler)


def configure(enabled: bool, trace_paint: bool = False, log_file: Optional[str] = None) -> None:
    """Switch tracing on or off at runtime.

    Args:
        enabled: Whether trace lines are emitted at all.
        trace_paint: Whether PAINT category lines are emitted.
        log_file: Optional file that mirrors the stderr output.
    """
    global DEBUG_TRACE, TRACE_PAINT, LOG_FILE
    DEBUG_TRACE = bool(enabled) or bool(os.environ.get("SCREENDESIGNER_TRACE"))
    TRACE_PAINT = bool(trace_paint)
    if (log_file or None) != LOG_FILE:
        close_log()
        LOG_FILE = log_file or None


def configure_from_settings(settings) -> None:
    """Apply the ``[debug]`` section of an ``AppSettings`` instance."""
    configure(settings.debug.trace, settings.debug.trace_paint, settings.debug.log_file)


def trace(msg: str, category: str = "INFO"):
    """Emit a trace message with timestamp."""
    if not DEBUG_TRACE:
        return
    if category == "PAINT" and not TRACE_PAINT:
        return

    _ensure_handlers()
    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    _logger.debug(f"[{timestamp}] [{category}] {msg}")


def trace_exception(msg: str = "Exception"):
    """Trace the exception currently being handled."""
    if not DEBUG_TRACE:
        return
    trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def trace_call(category: str = "CALL"):
    """Decorator to trace function calls."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not DEBUG_TRACE:
                return func(*args, **kwargs)
            func_name = func.__qualname__
            trace(f">>> {func_name}", category)
            try:
                result = func(*args, **kwargs)
                trace(f"<<< {func_name}", category)
                return result
            except Exception as e:
                trace(f"!!! {func_name} raised {type(e).__name__}: {e}", "ERROR")
                raise
        return wrapper
    return decorator


def close_log():
    """Close the trace log file, if one is open."""
    global _file_handler
    if _file_handler is not None:
        _logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
