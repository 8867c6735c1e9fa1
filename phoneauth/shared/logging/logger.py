"""loguru setup shared by the app, the CLI entry points and the tests.

Every record carries ``extra["correlation_id"]``: the request middleware sets
it per request, everything else logs under ``"-"``.
"""

from __future__ import annotations

import inspect
import logging
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from phoneauth.shared.config import LoggingConfig

from .sensitive_filter import sanitize_record

_NO_CORRELATION = "-"

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_QUIET_LOGGERS = {"werkzeug": logging.INFO, "sqlalchemy.engine": logging.WARNING}

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default=_NO_CORRELATION)

_logger.configure(extra={"correlation_id": _NO_CORRELATION})


def _default_log_file() -> Path:
    return Path(__file__).resolve().parents[2] / "instance" / "phoneauth.log"


class _InterceptHandler(logging.Handler):
    """Route stdlib ``logging`` records (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        _logger.opt(depth=depth, exception=record.exc_info).bind(
            correlation_id=_CORRELATION_ID.get()
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that binds the current correlation id on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_CORRELATION_ID.get()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or _NO_CORRELATION)


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set(_NO_CORRELATION)


def setup_logging(config: LoggingConfig | None = None, *, debug: bool = False) -> None:
    """(Re)install the stderr and file sinks. Safe to call more than once."""
    config = config or LoggingConfig()  # type: ignore[call-arg]
    level = "DEBUG" if debug else config.level
    log_file = Path(config.file) if config.file else _default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    common = {"level": level, "format": _FMT, "filter": sanitize_record, "diagnose": False}
    _logger.remove()
    _logger.add(sys.stderr, colorize=True, backtrace=debug, **common)
    _logger.add(
        str(log_file),
        colorize=False,
        backtrace=False,
        enqueue=True,
        encoding="utf-8",
        rotation="10 MB",
        retention=5,
        **common,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, stdlib_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(stdlib_level)


logger = ContextualLogger()

__all__ = [
    "ContextualLogger",
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
