"""
Parex Logging

Purpose
-------
Logging helpers for Parex and for applications embedding it.

Every module in the package logs through ``get_logger(__name__)``, so all
records land under the ``parex`` logger. Nothing is configured on import
beyond a ``NullHandler``; the host application either routes ``parex``
records through its own handlers or calls ``setup_logging()`` once.

Responsibilities
----------------
- Carry operation context in a ContextVar (``LogContext``):
  - component, operation, correlation_id
  - category, error_code of the exception being built or reported
- Copy that context onto records (``ContextFilter``).
- Render records as one JSON object per line (``JSONFormatter``).
- Attach / detach a single console handler on the ``parex`` logger.

Dependencies
------------
- parex.core.config.Config (LOG_LEVEL, LOG_JSON, LOG_PROPAGATE)
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from logging import Logger
from typing import IO, Any, Dict, Optional

from parex.core.config.config import Config

ROOT_LOGGER_NAME = "parex"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_log_context: ContextVar[Dict[str, Any]] = ContextVar("parex_log_context", default={})

_handler: Optional[logging.Handler] = None

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


# ============================================================================
# Filter & Formatter
# ============================================================================


class ContextFilter(logging.Filter):
    """Copy the active ``LogContext`` onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = _log_context.get({})

        record.correlation_id = context.get("correlation_id", "N/A")
        record.component = context.get("component") or record.name.split(".", 1)[0]
        record.operation = context.get("operation", "N/A")

        # Values passed with extra={...} are kept.
        for key in ("category", "error_code"):
            if not hasattr(record, key):
                setattr(record, key, context.get(key, "N/A"))

        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record; unknown record attributes go under ``extra``."""

    CONTEXT_ATTRS = ("correlation_id", "component", "operation", "category", "error_code")

    # Attributes every LogRecord has; anything else came from extra={...}.
    _RESERVED = frozenset(
        vars(logging.LogRecord("", 0, "", 0, "", (), None))
    ) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr in self.CONTEXT_ATTRS:
            value = getattr(record, attr, None)
            if value not in (None, "N/A"):
                payload[attr] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._RESERVED
            and key not in self.CONTEXT_ATTRS
            and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, ensure_ascii=False, default=str)


# ============================================================================
# Setup
# ============================================================================


def setup_logging(stream: Optional[IO[str]] = None) -> logging.Handler:
    """
    Attach a console handler to the ``parex`` logger.

    The handler writes JSON when ``Config.LOG_JSON`` is on (or, when unset,
    in production) and plain text otherwise. Calling again returns the
    handler already installed.
    """
    global _handler

    if _handler is not None:
        return _handler

    level = getattr(logging, Config.LOG_LEVEL, logging.INFO)
    use_json = Config.is_production() if Config.LOG_JSON is None else Config.LOG_JSON

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.addFilter(ContextFilter())
    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = Config.LOG_PROPAGATE
    logger.addHandler(handler)
    _handler = handler

    logger.debug(
        "Logging initialized",
        extra={"log_level": Config.LOG_LEVEL, "json": use_json},
    )
    return handler


def shutdown_logging() -> None:
    """Remove the handler installed by ``setup_logging()``, if any."""
    global _handler

    if _handler is None:
        return

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.removeHandler(_handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _handler.close()
    _handler = None


def is_logging_configured() -> bool:
    return _handler is not None


# ============================================================================
# Public API
# ============================================================================


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Scope log context for a block of code (sync or async).

    Nested contexts inherit the outer values and override what they set.

    Example:
        >>> with LogContext(component="orders", category=0x10010, error_code=2):
        ...     logger.warning("Order timed out")
    """

    def __init__(
        self,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        correlation_id: Optional[str] = None,
        category: Optional[int] = None,
        error_code: Optional[int] = None,
        **extra: Any,
    ) -> None:
        self.context: Dict[str, Any] = dict(_log_context.get({}))
        self.context["correlation_id"] = correlation_id or uuid.uuid4().hex[:8]
        self.context.update(extra)
        for key, value in (
            ("component", component),
            ("operation", operation),
            ("category", category),
            ("error_code", error_code),
        ):
            if value is not None:
                self.context[key] = value

        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        self._token = _log_context.set(self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None

    async def __aenter__(self) -> "LogContext":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def set_log_context(**values: Any) -> None:
    """Merge ``values`` into the current context (None values are skipped)."""
    current = dict(_log_context.get({}))
    current.update({key: value for key, value in values.items() if value is not None})
    _log_context.set(current)


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get({}))


def clear_log_context() -> None:
    _log_context.set({})
