"""
Core exceptions for Parex.

Purpose
-------
Define the structured exception hierarchy raised by Parex itself when an
exception type, builder or registry is misused. These are programming or
configuration errors: none of them is transient and none is ever retried.

Design Notes
------------
- All core exceptions inherit from `ParexError`.
- Each exception carries:
  - `message`: human-readable description
  - `details`: additional structured context (dict)
  - `severity`: `ErrorSeverity` value for logging/alerting
  - `is_retryable`: always False for the errors defined here
  - `error_code`: short, stable identifier for programmatic use
- `InvalidArgumentError` and `UnsupportedTypeError` also derive from the
  matching builtin so generic `except ValueError` / `except TypeError`
  handlers keep working.

Exception Hierarchy
-------------------
ParexError (base)
├── PreconditionError (required argument missing)
├── InvalidArgumentError (bad or unset category / error code)
├── CategoryConflictError (two unrelated types share one category)
└── UnsupportedTypeError (parameter source produced an unusable value)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels for logging and alerting."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"  # Caller bugs
    CRITICAL = "critical"  # Cross-subsystem misconfiguration


class ParexError(Exception):
    """
    Base exception for all Parex core errors.

    Args:
        message: Human-readable error message
        details: Additional structured data about the error
        severity: Error severity level for logging handlers
        is_retryable: Whether the operation can be retried
        error_code: Optional code for programmatic handling

    Example:
        >>> raise ParexError("Registry misuse", {"category": 10})
    """

    DEFAULT_SEVERITY: ErrorSeverity = ErrorSeverity.ERROR
    DEFAULT_RETRYABLE: bool = False
    DEFAULT_ERROR_CODE: str = "PAREX_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None,
        is_retryable: Optional[bool] = None,
        error_code: Optional[str] = None,
    ) -> None:
        self.message: str = message
        self.details: Dict[str, Any] = details or {}
        self.severity: ErrorSeverity = severity or self.DEFAULT_SEVERITY
        self.is_retryable: bool = (
            is_retryable if is_retryable is not None else self.DEFAULT_RETRYABLE
        )
        self.error_code: str = error_code or self.DEFAULT_ERROR_CODE
        super().__init__(self.message)

    def __str__(self) -> str:
        details_str = f" | Details: {self.details}" if self.details else ""
        return f"[{self.error_code}] {self.message}{details_str}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"severity={self.severity.value!r}, "
            f"is_retryable={self.is_retryable!r}"
            ")"
        )


class PreconditionError(ParexError):
    """
    Raised when a required construction argument was not supplied.

    Args:
        argument: Name of the missing argument
        message: Optional override for the default message
    """

    DEFAULT_ERROR_CODE = "PRECONDITION_FAILED"

    def __init__(self, argument: str, message: Optional[str] = None) -> None:
        self.argument = argument
        super().__init__(
            message or f"The argument '{argument}' is required",
            details={"argument": argument},
        )


class InvalidArgumentError(ParexError, ValueError):
    """
    Raised when a category is negative, or when the category or error code is
    still unset when a builder is finalized.

    Args:
        argument: Name of the offending argument
        value: The rejected value
        message: Description of the problem
    """

    DEFAULT_ERROR_CODE = "INVALID_ARGUMENT"

    def __init__(self, argument: str, value: Any, message: str) -> None:
        self.argument = argument
        self.value = value
        super().__init__(
            message,
            details={"argument": argument, "value": value},
        )


class CategoryConflictError(ParexError):
    """
    Raised when two unrelated exception types claim the same category.

    This means two subsystems picked the same category id. It must surface
    at startup or in integration tests; never catch and continue.

    Args:
        category: The contested category id
        registered_type: The type that already owns the category
        attempted_type: The unrelated type that tried to register
    """

    DEFAULT_SEVERITY = ErrorSeverity.CRITICAL
    DEFAULT_ERROR_CODE = "CATEGORY_CONFLICT"

    def __init__(self, category: int, registered_type: type, attempted_type: type) -> None:
        self.category = category
        self.registered_type = registered_type
        self.attempted_type = attempted_type
        super().__init__(
            f"The category [{category}] is registered by exception - "
            f"{_qualified_name(registered_type)}",
            details={
                "category": category,
                "registered_type": _qualified_name(registered_type),
                "attempted_type": _qualified_name(attempted_type),
            },
        )


class UnsupportedTypeError(ParexError, TypeError):
    """
    Raised when a parameter source yields a value that is neither a
    sequence nor a mapping.

    Args:
        actual_type: Runtime type of the value that was produced
    """

    DEFAULT_ERROR_CODE = "UNSUPPORTED_TYPE"

    def __init__(self, actual_type: type) -> None:
        self.actual_type = actual_type
        super().__init__(
            f"Unsupported variables type - {_qualified_name(actual_type)}",
            details={"actual_type": _qualified_name(actual_type)},
        )


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


__all__ = [
    "ErrorSeverity",
    "ParexError",
    "PreconditionError",
    "InvalidArgumentError",
    "CategoryConflictError",
    "UnsupportedTypeError",
]
