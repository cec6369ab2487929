"""
ExceptionBuilder: fluent construction of parameterized exceptions.

Purpose
-------
Collects the category (fixed when the builder is created), the error code and
the substitution variables of one exception occurrence, validates them, and
instantiates the concrete exception class.

Lifecycle of build()
--------------------
1. validate(): category and error code must both be set
2. before_create(builder) hook
3. instantiate the exception class (registers its category)
4. after_create(instance) hook
5. return the instance

A failure in step 1 or 3 aborts the build; no partially built exception is
ever returned.

Variables
---------
Indexed and named variables are stored in separate slots and may both be
set; the message template decides which ones it uses. Setting a slot again
replaces its previous value.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, Tuple, Type, TypeVar, Union

from parex.core.exceptions import (
    InvalidArgumentError,
    PreconditionError,
    UnsupportedTypeError,
)
from parex.core.logging.logger import get_logger
from parex.exception.errors import ExceptionErrors
from parex.exception.parameterized import ExceptionFields, ParameterizedException
from parex.exception.registry import CategoryRegistry

logger = get_logger(__name__)

UNSET = -1

E = TypeVar("E", bound=ParameterizedException)


@dataclass(frozen=True)
class IndexedParams:
    """Parameter source result holding positional variables."""

    values: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class NamedParams:
    """Parameter source result holding named variables."""

    values: Mapping[str, Any] = field(default_factory=dict)


ParameterSource = Union[IndexedParams, NamedParams, Any]


def _noop(_: Any) -> None:
    return None


class ExceptionBuilder(Generic[E]):
    """
    Builder for one concrete ``ParameterizedException`` subclass.

    Args:
        exception_type: Concrete exception class to instantiate
        category: Category id of the exception family, must be >= 0
        errors: Message template source of the exception family
        registry: Category registry to check against (default: process-wide)
        before_create: Called with the builder after validation
        after_create: Called with the new instance before it is returned

    Example:
        >>> exc = (
        ...     ExceptionBuilder(OrderError, 0x10000, ORDER_ERRORS)
        ...     .error_code(2)
        ...     .variables(order_id=7, seconds=30)
        ...     .build()
        ... )
    """

    def __init__(
        self,
        exception_type: Type[E],
        category: int,
        errors: ExceptionErrors,
        *,
        registry: Optional[CategoryRegistry] = None,
        before_create: Optional[Callable[["ExceptionBuilder[E]"], None]] = None,
        after_create: Optional[Callable[[E], None]] = None,
    ) -> None:
        if exception_type is None:
            raise PreconditionError("exception_type")
        if not (
            isinstance(exception_type, type)
            and issubclass(exception_type, ParameterizedException)
            and exception_type is not ParameterizedException
        ):
            raise PreconditionError(
                "exception_type",
                f"{exception_type!r} is not a concrete ParameterizedException subclass",
            )
        if category is None or category < 0:
            raise InvalidArgumentError(
                "category", category, "The exception category cant be negative"
            )
        if errors is None:
            raise PreconditionError("errors", "The ExceptionErrors is not specified")

        self._exception_type = exception_type
        self._category: int = category
        self._error_code: int = UNSET
        self._errors = errors
        self._registry = registry
        self._indexed_vars: Optional[Tuple[Any, ...]] = None
        self._named_vars: Optional[Mapping[str, Any]] = None
        self._before_create = before_create or _noop
        self._after_create = after_create or _noop

    # ------------------------------------------------------------------ #
    # Fluent setters
    # ------------------------------------------------------------------ #

    def error_code(self, code: int) -> "ExceptionBuilder[E]":
        self._error_code = code
        return self

    def variables(self, *indexed: Any, **named: Any) -> "ExceptionBuilder[E]":
        """Set indexed variables from positional args and named ones from kwargs."""
        if indexed:
            self._indexed_vars = tuple(indexed)
        if named:
            self._named_vars = dict(named)
        return self

    def indexed_variables(self, values: Sequence[Any]) -> "ExceptionBuilder[E]":
        self._indexed_vars = tuple(values)
        return self

    def named_variables(self, values: Mapping[str, Any]) -> "ExceptionBuilder[E]":
        self._named_vars = dict(values)
        return self

    def parameters(self, source: ParameterSource) -> "ExceptionBuilder[E]":
        """
        Take variables from a parameter source.

        ``IndexedParams`` / ``NamedParams`` fill the matching slot. Any other
        object must expose ``get()``; a sequence result fills the indexed
        slot and a mapping result fills the named slot.

        Raises:
            UnsupportedTypeError: if the source yields anything else
        """
        if isinstance(source, IndexedParams):
            return self.indexed_variables(source.values)
        if isinstance(source, NamedParams):
            return self.named_variables(source.values)

        getter = getattr(source, "get", None)
        if not callable(getter):
            raise UnsupportedTypeError(type(source))

        value = getter()
        if isinstance(value, Mapping):
            return self.named_variables(value)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            return self.indexed_variables(value)
        raise UnsupportedTypeError(type(value))

    # ------------------------------------------------------------------ #
    # Finalization
    # ------------------------------------------------------------------ #

    @property
    def exception_type(self) -> Type[E]:
        return self._exception_type

    @property
    def category(self) -> int:
        return self._category

    def validate(self) -> None:
        if self._category == UNSET:
            raise InvalidArgumentError("category", self._category, "The category must be provided")
        if self._error_code == UNSET:
            raise InvalidArgumentError(
                "error_code", self._error_code, "The error code must be provided"
            )

    def fields(self) -> ExceptionFields:
        """Snapshot of the current builder state."""
        return ExceptionFields(
            category=self._category,
            error_code=self._error_code,
            errors=self._errors,
            indexed_vars=self._indexed_vars,
            named_vars=self._named_vars,
        )

    def build(self) -> E:
        self.validate()
        self._before_create(self)

        instance = self._exception_type(self.fields(), registry=self._registry)

        self._after_create(instance)
        logger.debug(
            "Exception built",
            extra={
                "exception_type": self._exception_type.__qualname__,
                "category": self._category,
                "error_code": self._error_code,
            },
        )
        return instance
