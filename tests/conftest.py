"""
Pytest Configuration and Fixtures for Parex Tests
=================================================

Purpose
-------
Centralized fixtures for the Parex test suite: a fresh category registry per
test, template sources, and sample exception families.

Architecture Notes
------------------
- Every test gets its own CategoryRegistry; nothing touches the process-wide
  default registry unless a test asks for it explicitly.
- Sample families mirror a typical layout: a family root, refinements of it,
  and an unrelated family to provoke conflicts.
"""

from __future__ import annotations

import os
from types import SimpleNamespace

import pytest

from parex.core.config.config import Config
from parex.exception import (
    CategoryRegistry,
    ParameterizedException,
    TemplateErrors,
)

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["PAREX_ENVIRONMENT"] = "testing"
    Config.load()


# ============================================================================
# SAMPLE EXCEPTION FAMILIES
# ============================================================================

ORDER_CATEGORY = 0x10010
PAYMENT_CATEGORY = 0x10020

ORDER_ERRORS = TemplateErrors(
    {
        1: "Order {order_id} not found",
        2: "Order {order_id} timed out after {seconds}s",
        3: "Order {} was cancelled by {}",
    }
)

PAYMENT_ERRORS = TemplateErrors({1: "Payment of {amount:,} declined"})


class OrderError(ParameterizedException):
    CATEGORY = ORDER_CATEGORY
    ERRORS = ORDER_ERRORS


class OrderTimeoutError(OrderError):
    pass


class OrderTimeoutRetryError(OrderTimeoutError):
    pass


class OrderValidationError(OrderError):
    pass


class PaymentError(ParameterizedException):
    CATEGORY = PAYMENT_CATEGORY
    ERRORS = PAYMENT_ERRORS


class CardDeclinedError(PaymentError):
    pass


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def registry() -> CategoryRegistry:
    """Fresh, empty category registry."""
    return CategoryRegistry()


@pytest.fixture
def families() -> SimpleNamespace:
    """Sample exception families (classes are shared, registries are not)."""
    return SimpleNamespace(
        OrderError=OrderError,
        OrderTimeoutError=OrderTimeoutError,
        OrderTimeoutRetryError=OrderTimeoutRetryError,
        OrderValidationError=OrderValidationError,
        PaymentError=PaymentError,
        CardDeclinedError=CardDeclinedError,
        ORDER_ERRORS=ORDER_ERRORS,
        PAYMENT_ERRORS=PAYMENT_ERRORS,
    )


@pytest.fixture
def env_config(monkeypatch):
    """
    Set PAREX_* environment variables and reload Config.

    Usage: ``env_config(LOG_LEVEL="DEBUG")``. The original environment and
    configuration are restored afterwards.
    """

    def _apply(**values: str) -> type:
        for name, value in values.items():
            monkeypatch.setenv(f"{Config.ENV_PREFIX}{name}", value)
        Config.load()
        return Config

    yield _apply

    monkeypatch.undo()
    Config.load()
