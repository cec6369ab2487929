"""
Parameterized exceptions.

Purpose
-------
``ParameterizedException`` is the base of every exception family whose
message is built from a template plus substitution variables. Each instance
carries two numbers:

- ``category``: the namespace owned by one exception family (one subsystem)
- ``error_code``: the specific kind of error within that category

Category ids 0x0000 ~ 0xFFFF are reserved by the framework (see
``parex.exception.categories``).

Design Notes
------------
- Instances are created through ``ExceptionBuilder.build()``; the builder
  validates the fields, then instantiates the concrete class.
- Construction registers ``(category, type(self))`` with the category
  registry before any field is stored. A conflict aborts construction.
- Every class records its single declared parent family member in
  ``supertype``. Direct subclasses of ``ParameterizedException`` are family
  roots and have no supertype.
- Instances are immutable: fields are read-only properties and the variables
  are copied into a tuple and a read-only mapping.
- The message is rendered lazily, on each ``get_message()`` call.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Optional, Tuple

from parex.core.exceptions import InvalidArgumentError
from parex.exception.errors import ExceptionErrors
from parex.exception.formatting import make_string
from parex.exception.registry import CategoryRegistry, get_default_registry

if TYPE_CHECKING:
    from parex.exception.builder import ExceptionBuilder


@dataclass(frozen=True)
class ExceptionFields:
    """Validated field values handed from a builder to the exception class."""

    category: int
    error_code: int
    errors: ExceptionErrors
    indexed_vars: Optional[Tuple[Any, ...]] = None
    named_vars: Optional[Mapping[str, Any]] = None


class ParameterizedException(Exception):
    """
    Base class for exceptions identified by category and error code.

    Subclasses may declare ``CATEGORY`` and ``ERRORS`` to get a ready-made
    builder from ``builder()``; subclasses of a family inherit both.

    Example:
        >>> class OrderError(ParameterizedException):
        ...     CATEGORY = 0x10000
        ...     ERRORS = TemplateErrors({1: "Order {order_id} not found"})
        >>> raise OrderError.builder().error_code(1).variables(order_id=7).build()
    """

    supertype: ClassVar[Optional[type]] = None

    CATEGORY: ClassVar[Optional[int]] = None
    ERRORS: ClassVar[Optional[ExceptionErrors]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        parents = [base for base in cls.__bases__ if issubclass(base, ParameterizedException)]
        if len(parents) != 1:
            raise TypeError(
                f"{cls.__qualname__} must extend exactly one parameterized exception, "
                f"got {[p.__qualname__ for p in parents]}"
            )
        parent = parents[0]
        cls.supertype = None if parent is ParameterizedException else parent

    def __init__(
        self,
        fields: ExceptionFields,
        *,
        registry: Optional[CategoryRegistry] = None,
    ) -> None:
        if type(self) is ParameterizedException:
            raise TypeError("ParameterizedException is abstract; subclass it")

        if registry is None:
            registry = get_default_registry()
        registry.check_and_register(fields.category, type(self))

        super().__init__()
        self._category = fields.category
        self._error_code = fields.error_code
        self._errors = fields.errors
        self._indexed_vars: Optional[Tuple[Any, ...]] = (
            tuple(fields.indexed_vars) if fields.indexed_vars is not None else None
        )
        self._named_vars: Optional[Mapping[str, Any]] = (
            MappingProxyType(dict(fields.named_vars)) if fields.named_vars is not None else None
        )

    def __reduce__(self) -> Tuple[Any, ...]:
        # BaseException.__reduce__ would call __init__ with no fields. The copy
        # skips the registry check; its category was checked when the
        # original was built.
        state = dict(self.__dict__)
        if self._named_vars is not None:
            state["_named_vars"] = dict(self._named_vars)
        return (type(self).__new__, (type(self),), state)

    def __setstate__(self, state: Mapping[str, Any]) -> None:
        state = dict(state)
        if state.get("_named_vars") is not None:
            state["_named_vars"] = MappingProxyType(dict(state["_named_vars"]))
        self.__dict__.update(state)

    @classmethod
    def builder(
        cls,
        *,
        registry: Optional[CategoryRegistry] = None,
        **hooks: Any,
    ) -> "ExceptionBuilder":
        """
        Return a builder preset with the class's ``CATEGORY`` and ``ERRORS``.

        ``hooks`` are passed through to ``ExceptionBuilder``
        (``before_create`` / ``after_create``).
        """
        from parex.exception.builder import ExceptionBuilder

        if cls.CATEGORY is None:
            raise InvalidArgumentError(
                "category", None, f"{cls.__qualname__} does not declare a CATEGORY"
            )
        return ExceptionBuilder(cls, cls.CATEGORY, cls.ERRORS, registry=registry, **hooks)

    @property
    def error_code(self) -> int:
        return self._error_code

    @property
    def category(self) -> int:
        return self._category

    @property
    def indexed_vars(self) -> Optional[Tuple[Any, ...]]:
        return self._indexed_vars

    @property
    def named_vars(self) -> Optional[Mapping[str, Any]]:
        return self._named_vars

    @property
    def errors(self) -> ExceptionErrors:
        return self._errors

    def default_message(self) -> str:
        """Message used when the errors source has no template."""
        return f"{type(self).__name__} (category={self._category}, error_code={self._error_code})"

    def get_message(self) -> str:
        template = self._errors.get_message_template(self)
        if template is None:
            return self.default_message()
        return make_string(template, self._named_vars, self._indexed_vars)

    @property
    def message(self) -> str:
        return self.get_message()

    def __str__(self) -> str:
        return self.get_message()

    def __repr__(self) -> str:
        named = dict(self._named_vars) if self._named_vars is not None else None
        return (
            f"{self.__class__.__name__}("
            f"category={self._category!r}, "
            f"error_code={self._error_code!r}, "
            f"indexed_vars={self._indexed_vars!r}, "
            f"named_vars={named!r}"
            ")"
        )
