"""Loguru setup shared by the web app and the CLI.

Every record passes through ``sanitize_record`` before reaching a sink, and
carries the correlation id of the request that produced it.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

NO_CORRELATION_ID = "-"

# stdlib loggers that are too chatty at the root level
_LIBRARY_LEVELS = {
    "werkzeug": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
}

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default=NO_CORRELATION_ID)

_logger.configure(extra={"correlation_id": NO_CORRELATION_ID})


def _log_file_path() -> str:
    path = os.getenv("LOG_FILE")
    if not path:
        root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../../instance"))
        path = os.path.join(root, "authcore.log")
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    return path


class _InterceptHandler(logging.Handler):
    """Forward stdlib records (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.opt(depth=6, exception=record.exc_info).log(
            level,
            record.getMessage(),
            correlation_id=_CORRELATION_ID.get(),
        )


class ContextualLogger:
    """Proxy for loguru that injects correlation ids via ContextVar."""

    def __getattr__(self, name: str) -> Any:  # pragma: no cover
        bound = _logger.bind(correlation_id=_CORRELATION_ID.get())
        return getattr(bound, name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or NO_CORRELATION_ID)


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set(NO_CORRELATION_ID)


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    """(Re)install the stderr and file sinks.

    ``level`` wins over ``LOG_LEVEL``; ``debug_mode`` only applies when neither
    is given. Safe to call more than once, e.g. per ``create_app``.
    """
    if not level:
        level = os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")
    level = level.upper()

    common: dict[str, Any] = {
        "level": level,
        "format": _FMT,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }
    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **common)
    _logger.add(_log_file_path(), colorize=False, enqueue=True, encoding="utf-8", **common)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, lib_level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(lib_level)


logger = ContextualLogger()

__all__ = [
    "NO_CORRELATION_ID",
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
