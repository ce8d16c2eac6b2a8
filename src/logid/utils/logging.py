"""Structured logging setup for logid."""

import atexit
import os
from pathlib import Path
from typing import Any, Optional, TextIO, Union

import structlog

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_log_handle: Optional[TextIO] = None
_atexit_registered = False


def default_log_file() -> Path:
    """Log file used when neither an argument nor LOGID_LOG_FILE names one."""
    return Path.home() / ".cache" / "logid" / "logs" / "logid.log"


def resolve_log_file(log_file: Optional[Union[str, Path]] = None) -> Path:
    """Pick the log file: explicit argument, then LOGID_LOG_FILE, then the default."""
    if log_file is not None:
        return Path(log_file).expanduser()
    if env_file := os.getenv("LOGID_LOG_FILE"):
        return Path(env_file).expanduser()
    return default_log_file()


def configure_logging(log_file: Optional[Union[str, Path]] = None) -> Path:
    """
    Configure structlog to append JSON lines to the logid log file.

    Safe to call more than once per process (the CLI does so on every
    invocation): the previous log file is closed and later events go to
    the newly resolved file.

    Environment:
    - LOGID_LOG_FILE: log file path (default ~/.cache/logid/logs/logid.log)
    - LOGID_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default INFO;
      anything else falls back to INFO)

    Log levels:
    - DEBUG: Random draw collisions
    - INFO: Lists loaded/saved, IDs allocated or reused
    - WARNING: Low free ID space, missing location list, skipped entries
    - ERROR: Unreadable or malformed lists, failed writes, exhausted ranges

    Example:
        LOGID_LOG_LEVEL=DEBUG logid new TRICE16 "temp %d"
        tail -f ~/.cache/logid/logs/logid.log | jq .

    Returns:
        Path of the file events are written to
    """
    global _log_handle, _atexit_registered

    path = resolve_log_file(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    log_level = os.environ.get("LOGID_LOG_LEVEL", "INFO").upper()
    if log_level not in VALID_LEVELS:
        log_level = "INFO"

    close_logging()
    _log_handle = open(path, "a", encoding="utf-8")
    if not _atexit_registered:
        atexit.register(close_logging)
        _atexit_registered = True

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_log_handle),
        # Module-level loggers must follow reconfiguration
        cache_logger_on_first_use=False,
    )
    return path


def close_logging() -> None:
    """Close the current log file and restore structlog's defaults."""
    global _log_handle

    if _log_handle is None:
        return
    structlog.reset_defaults()
    _log_handle.close()
    _log_handle = None


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("id_allocated", id=1234, method="upward")
    """
    return structlog.get_logger(name)
