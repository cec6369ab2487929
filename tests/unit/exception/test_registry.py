"""
Unit Tests for CategoryRegistry
===============================

Test Coverage
-------------
- First registration, idempotence
- Subtype / supertype refinement in both orders
- Conflicts between unrelated families
- Precondition checks and introspection
- Default registry lifecycle and logging

Testing Strategy
----------------
- Fresh registry per test (fixture)
- AAA pattern (Arrange, Act, Assert)
"""

import logging

import pytest

from parex.core.exceptions import (
    CategoryConflictError,
    ErrorSeverity,
    PreconditionError,
)
from parex.exception.registry import (
    CategoryRegistry,
    get_default_registry,
    is_ancestor,
)


# ============================================================================
# ANCESTRY TESTS
# ============================================================================


@pytest.mark.unit
class TestAncestry:
    """Test the explicit supertype chain."""

    def test_family_root_has_no_supertype(self, families):
        assert families.OrderError.supertype is None

    def test_refinement_points_at_parent(self, families):
        assert families.OrderTimeoutError.supertype is families.OrderError
        assert families.OrderTimeoutRetryError.supertype is families.OrderTimeoutError

    def test_ancestor_is_transitive(self, families):
        assert is_ancestor(families.OrderError, families.OrderTimeoutRetryError)

    def test_type_is_not_its_own_ancestor(self, families):
        assert not is_ancestor(families.OrderError, families.OrderError)

    def test_siblings_are_unrelated(self, families):
        assert not is_ancestor(families.OrderTimeoutError, families.OrderValidationError)
        assert not is_ancestor(families.OrderValidationError, families.OrderTimeoutError)


# ============================================================================
# REGISTRATION TESTS
# ============================================================================


@pytest.mark.unit
class TestCheckAndRegister:
    """Test check_and_register() outcomes."""

    def test_first_registration_inserts_owner(self, registry, families):
        # Act
        registry.check_and_register(10, families.OrderError)

        # Assert
        assert registry.owner_of(10) is families.OrderError
        assert 10 in registry
        assert len(registry) == 1

    def test_same_pair_twice_is_idempotent(self, registry, families):
        registry.check_and_register(10, families.OrderError)
        before = registry.snapshot()

        registry.check_and_register(10, families.OrderError)

        assert registry.snapshot() == before

    def test_subtype_after_supertype_keeps_supertype(self, registry, families):
        registry.check_and_register(10, families.OrderError)

        registry.check_and_register(10, families.OrderTimeoutError)

        assert registry.owner_of(10) is families.OrderError

    def test_supertype_after_subtype_widens_owner(self, registry, families):
        registry.check_and_register(10, families.OrderTimeoutError)

        registry.check_and_register(10, families.OrderError)

        assert registry.owner_of(10) is families.OrderError

    def test_refinement_converges_regardless_of_order(self, families):
        forward = CategoryRegistry()
        backward = CategoryRegistry()
        chain = [
            families.OrderError,
            families.OrderTimeoutError,
            families.OrderTimeoutRetryError,
        ]

        for exc_type in chain:
            forward.check_and_register(10, exc_type)
        for exc_type in reversed(chain):
            backward.check_and_register(10, exc_type)

        assert forward.owner_of(10) is families.OrderError
        assert backward.owner_of(10) is families.OrderError

    def test_sibling_after_widening_is_accepted(self, registry, families):
        registry.check_and_register(10, families.OrderTimeoutError)
        registry.check_and_register(10, families.OrderError)

        registry.check_and_register(10, families.OrderValidationError)

        assert registry.owner_of(10) is families.OrderError

    def test_sibling_before_widening_conflicts(self, registry, families):
        """Siblings are unrelated until their common parent has registered."""
        registry.check_and_register(10, families.OrderTimeoutError)

        with pytest.raises(CategoryConflictError):
            registry.check_and_register(10, families.OrderValidationError)

    def test_categories_are_independent(self, registry, families):
        registry.check_and_register(10, families.OrderError)
        registry.check_and_register(11, families.PaymentError)

        assert registry.snapshot() == {
            10: families.OrderError,
            11: families.PaymentError,
        }


# ============================================================================
# CONFLICT TESTS
# ============================================================================


@pytest.mark.unit
class TestConflicts:
    """Test rejection of unrelated types."""

    def test_unrelated_type_raises_conflict(self, registry, families):
        registry.check_and_register(10, families.OrderError)

        with pytest.raises(CategoryConflictError) as exc_info:
            registry.check_and_register(10, families.PaymentError)

        error = exc_info.value
        assert error.category == 10
        assert error.registered_type is families.OrderError
        assert error.attempted_type is families.PaymentError
        assert "OrderError" in str(error)
        assert "[10]" in str(error)

    def test_conflict_leaves_registry_unchanged(self, registry, families):
        registry.check_and_register(10, families.OrderError)

        with pytest.raises(CategoryConflictError):
            registry.check_and_register(10, families.CardDeclinedError)

        assert registry.owner_of(10) is families.OrderError
        assert len(registry) == 1

    def test_conflict_is_critical_and_not_retryable(self, registry, families):
        registry.check_and_register(10, families.OrderError)

        with pytest.raises(CategoryConflictError) as exc_info:
            registry.check_and_register(10, families.PaymentError)

        assert exc_info.value.severity is ErrorSeverity.CRITICAL
        assert exc_info.value.is_retryable is False
        assert exc_info.value.error_code == "CATEGORY_CONFLICT"

    def test_conflict_is_logged(self, registry, families, caplog):
        registry.check_and_register(10, families.OrderError)

        with caplog.at_level(logging.ERROR, logger="parex.exception.registry"):
            with pytest.raises(CategoryConflictError):
                registry.check_and_register(10, families.PaymentError)

        records = [r for r in caplog.records if r.getMessage() == "Exception category conflict"]
        assert len(records) == 1
        assert records[0].category == 10
        assert records[0].registered_type == "OrderError"
        assert records[0].attempted_type == "PaymentError"
        assert records[0].reserved is True


# ============================================================================
# PRECONDITION & INTROSPECTION TESTS
# ============================================================================


@pytest.mark.unit
class TestPreconditions:
    """Test argument checks."""

    def test_missing_type_raises_precondition_error(self, registry):
        with pytest.raises(PreconditionError) as exc_info:
            registry.check_and_register(10, None)

        assert exc_info.value.argument == "exception_type"
        assert len(registry) == 0


@pytest.mark.unit
class TestIntrospection:
    """Test read-only views of the registry."""

    def test_owner_of_unknown_category_is_none(self, registry):
        assert registry.owner_of(42) is None
        assert 42 not in registry

    def test_snapshot_is_a_copy(self, registry, families):
        registry.check_and_register(10, families.OrderError)

        snapshot = registry.snapshot()
        snapshot[10] = families.PaymentError

        assert registry.owner_of(10) is families.OrderError

    def test_repr_reports_size(self, registry, families):
        registry.check_and_register(10, families.OrderError)

        assert repr(registry) == "CategoryRegistry(categories=1)"

    def test_widening_is_logged(self, registry, families, caplog):
        registry.check_and_register(10, families.OrderTimeoutError)

        with caplog.at_level(logging.INFO, logger="parex.exception.registry"):
            registry.check_and_register(10, families.OrderError)

        assert any(
            r.getMessage() == "Exception category owner widened to supertype"
            and r.owner_type == "OrderError"
            for r in caplog.records
        )


@pytest.mark.unit
class TestDefaultRegistry:
    """Test the process-wide registry accessor."""

    def test_default_registry_is_a_singleton(self):
        assert get_default_registry() is get_default_registry()

    def test_default_registry_is_a_category_registry(self):
        assert isinstance(get_default_registry(), CategoryRegistry)
