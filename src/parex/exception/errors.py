"""
Message template sources for parameterized exceptions.

Purpose
-------
An ``ExceptionErrors`` source maps an exception instance to the template its
message is rendered from. Each concrete exception family supplies its own
source when its builder is created; Parex only calls it.

Design Notes
------------
- Lookups receive the exception instance itself so a source may key on the
  error code, the category or the concrete type.
- Returning None means "no template"; the exception then falls back to its
  base message.
- ``TemplateErrors`` is the in-memory source most families need: templates
  keyed by error code, declared next to the exception classes.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Mapping, Optional

if TYPE_CHECKING:
    from parex.exception.parameterized import ParameterizedException


class ExceptionErrors(ABC):
    """Capability that resolves the message template of an exception."""

    @abstractmethod
    def get_message_template(self, exception: "ParameterizedException") -> Optional[str]:
        """Return the template for ``exception``, or None if there is none."""


class TemplateErrors(ExceptionErrors):
    """
    Templates keyed by error code.

    Example:
        >>> errors = TemplateErrors({
        ...     1: "Order {order_id} not found",
        ...     2: "Order {order_id} timed out after {seconds}s",
        ... })
        >>> errors.register(3, "Order {} was cancelled")
    """

    def __init__(self, templates: Optional[Mapping[int, str]] = None) -> None:
        self._lock = threading.Lock()
        self._templates: Dict[int, str] = dict(templates or {})

    def register(self, error_code: int, template: str) -> "TemplateErrors":
        with self._lock:
            self._templates[error_code] = template
        return self

    def get_message_template(self, exception: "ParameterizedException") -> Optional[str]:
        with self._lock:
            return self._templates.get(exception.error_code)

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)
