"""
debug_trace.py

Logging setup and debug instrumentation.
Tracing is enabled with ``--debug``; trace lines go to stderr and,
optionally, to a log file.
"""

import logging
import sys
import traceback
from datetime import datetime

TRACE_LOGGER = "svg_annotator.trace"

_log = logging.getLogger(TRACE_LOGGER)
_file_handler = None


class _TraceFormatter(logging.Formatter):
    """Formats records as ``[HH:MM:SS.mmm] [CATEGORY] message``."""

    def format(self, record):
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        category = getattr(record, "category", record.levelname)
        return f"[{timestamp}] [{category}] {record.getMessage()}"


def configure_logging(debug: bool = False, log_file: str = None) -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Args:
        debug: Emit DEBUG records, including trace lines.
        log_file: Optional path that receives a copy of every record.
    """
    global _file_handler
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(root.handlers):
        if getattr(handler, "_svg_annotator", False):
            root.removeHandler(handler)
            handler.close()
    _file_handler = None

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(_TraceFormatter() if debug else logging.Formatter("%(message)s"))
    stream._svg_annotator = True
    root.addHandler(stream)

    if log_file:
        _file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        _file_handler.setFormatter(_TraceFormatter())
        _file_handler._svg_annotator = True
        root.addHandler(_file_handler)


def trace(msg: str, category: str = "INFO"):
    """Log a debug trace message under *category*."""
    _log.debug(msg, extra={"category": category})


def trace_exception(msg: str = "Exception"):
    """Log the exception currently being handled."""
    trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def close_log():
    """Close log file."""
    global _file_handler
    if _file_handler:
        logging.getLogger().removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
