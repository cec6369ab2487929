"""
CategoryRegistry: process-wide ownership map from category id to exception type.

Purpose
-------
Guarantees that a category id is never shared by two unrelated exception
types, while letting an exception family (a base type and its refinements)
share one category across every level of its hierarchy.

Responsibilities
----------------
- Record the owning type of each category on first use
- Widen ownership to a supertype when a more general family member registers
- Reject a registration from a type unrelated to the current owner
- Provide read-only introspection (owner lookup, snapshot, counts)

Design Decisions
----------------
- **Single lock**: one threading.Lock guards the whole map. The map is small
  and contention is rare, so there is no per-entry locking.
- **Most general owner**: the entry always holds the least specific type seen
  so far, so a later check is one ancestor walk in either direction.
- **Explicit hierarchy**: ancestry follows the ``supertype`` chain each
  parameterized exception class declares, not Python's MRO.
- **No eviction**: entries live as long as the registry.
- **Logging outside the lock**: log records are emitted after the critical
  section has been left.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

from parex.core.exceptions import CategoryConflictError, PreconditionError
from parex.core.logging.logger import get_logger
from parex.exception.categories import is_reserved

logger = get_logger(__name__)


def supertype_of(exception_type: type) -> Optional[type]:
    """Return the declared supertype of ``exception_type``, if any."""
    return getattr(exception_type, "supertype", None)


def is_ancestor(ancestor: type, descendant: type) -> bool:
    """
    Return True if ``ancestor`` is reachable by walking up the declared
    supertype chain of ``descendant``. A type is not its own ancestor.
    """
    current = supertype_of(descendant)
    while current is not None:
        if current is ancestor:
            return True
        current = supertype_of(current)
    return False


class CategoryRegistry:
    """
    Registry of category owners.

    Thread Safety
    -------------
    Thread-safe. Every read and write of the map happens under ``_lock``;
    check_and_register() runs its lookup-compare-update as one unit.

    Examples
    --------
    >>> registry = CategoryRegistry()
    >>> registry.check_and_register(10, OrderError)
    >>> registry.check_and_register(10, OrderTimeoutError)
    >>> registry.owner_of(10) is OrderError
    True
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._owners: Dict[int, type] = {}

    def check_and_register(self, category: int, exception_type: type) -> None:
        """
        Verify that ``exception_type`` may use ``category`` and record it.

        Raises
        ------
        PreconditionError:
            If ``exception_type`` is None.
        CategoryConflictError:
            If the category is owned by a type unrelated to ``exception_type``.
            The registry is left unchanged.
        """
        if exception_type is None:
            raise PreconditionError("exception_type")

        with self._lock:
            registered = self._owners.get(category)
            if registered is None:
                self._owners[category] = exception_type
                outcome = "registered"
            elif registered is exception_type:
                return
            elif is_ancestor(exception_type, registered):
                # Using the super exception type to register
                self._owners[category] = exception_type
                outcome = "widened"
            elif is_ancestor(registered, exception_type):
                return
            else:
                outcome = "conflict"

        if outcome == "conflict":
            logger.error(
                "Exception category conflict",
                extra={
                    "category": category,
                    "registered_type": registered.__qualname__,
                    "attempted_type": exception_type.__qualname__,
                    "reserved": is_reserved(category),
                },
            )
            raise CategoryConflictError(category, registered, exception_type)

        if outcome == "widened":
            logger.info(
                "Exception category owner widened to supertype",
                extra={
                    "category": category,
                    "previous_type": registered.__qualname__,
                    "owner_type": exception_type.__qualname__,
                },
            )
        else:
            logger.debug(
                "Exception category registered",
                extra={
                    "category": category,
                    "owner_type": exception_type.__qualname__,
                    "reserved": is_reserved(category),
                },
            )

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    def owner_of(self, category: int) -> Optional[type]:
        """Return the type currently owning ``category``, or None."""
        with self._lock:
            return self._owners.get(category)

    def snapshot(self) -> Dict[int, type]:
        """Return a copy of the category → owner map."""
        with self._lock:
            return dict(self._owners)

    def __contains__(self, category: object) -> bool:
        with self._lock:
            return category in self._owners

    def __len__(self) -> int:
        with self._lock:
            return len(self._owners)

    def __repr__(self) -> str:
        return f"CategoryRegistry(categories={len(self)})"


_default_registry: Optional[CategoryRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> CategoryRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry

    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = CategoryRegistry()
    return _default_registry
