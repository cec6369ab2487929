"""
Static configuration management for Parex.

Purpose
-------
Provides centralized static configuration loaded from environment variables
with sensible defaults and type validation. Parex has no
dynamic configuration; everything here is read once at startup and may be
reloaded explicitly.

Responsibilities
----------------
- Load configuration from environment variables with .env support
- Provide type-safe access to the logging settings used by the library
- Track which values came from the environment versus defaults

Non-Responsibilities
--------------------
- Logging setup (handled by parex.core.logging)
- Category allocation (categories are chosen by the exception authors)

Architecture Notes
------------------
- Singleton pattern via class methods (no instantiation)
- Auto-loads on module import via Config.load()
- Invalid values log a warning and fall back to the documented default

Dependencies
------------
- python-dotenv: Environment variable loading
- logging: Basic logging (bootstrap only)

Environment Variables
---------------------
- PAREX_ENVIRONMENT: Environment type (default: development)
- PAREX_LOG_LEVEL: Logging level (default: INFO)
- PAREX_LOG_JSON: Force JSON console output (default: on in production)
- PAREX_LOG_PROPAGATE: Let parex records reach the root logger after setup
  (default: True)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Deployment environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        Parse environment string safely with fallback.

        Example
        -------
        >>> Environment.from_string("production") == Environment.PRODUCTION
        True
        >>> Environment.from_string("invalid") == Environment.DEVELOPMENT
        True
        """
        try:
            return cls(value.lower())
        except ValueError:
            logging.warning(
                "Unknown environment '%s', defaulting to development", value
            )
            return cls.DEVELOPMENT


class _ConfigLoadMetrics:
    """Tracks which configuration values came from the environment."""

    def __init__(self) -> None:
        self.env_vars_loaded: Dict[str, bool] = {}
        self.validation_errors: Dict[str, str] = {}
        self.defaults_used: Dict[str, Any] = {}
        self.last_reload: Optional[str] = None

    def record_env_load(self, key: str, from_env: bool, default: Any) -> None:
        self.env_vars_loaded[key] = from_env
        if not from_env:
            self.defaults_used[key] = default

    def record_validation_error(self, key: str, error: str) -> None:
        self.validation_errors[key] = error

    def get_summary(self) -> Dict[str, Any]:
        return {
            "total_configs": len(self.env_vars_loaded),
            "from_environment": sum(1 for v in self.env_vars_loaded.values() if v),
            "from_defaults": sum(1 for v in self.env_vars_loaded.values() if not v),
            "validation_errors": len(self.validation_errors),
            "defaults_used": list(self.defaults_used.keys()),
            "last_reload": self.last_reload,
        }


class Config:
    """
    Centralized static configuration for Parex.

    Usage
    -----
    >>> Config.LOG_LEVEL
    'INFO'
    >>> Config.is_production()
    False
    """

    ENV_PREFIX: str = "PAREX_"
    VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    _metrics: _ConfigLoadMetrics = _ConfigLoadMetrics()

    # =========================================================================
    # Environment Configuration
    # =========================================================================

    ENVIRONMENT: str = Environment.DEVELOPMENT.value

    # =========================================================================
    # Logging Configuration
    # =========================================================================

    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None  # None: JSON only in production
    LOG_PROPAGATE: bool = True

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @classmethod
    def _key(cls, name: str) -> str:
        return f"{cls.ENV_PREFIX}{name}"

    @classmethod
    def _reject(cls, key: str, error: str) -> None:
        logging.warning(error)
        cls._metrics.record_validation_error(key, error)

    @classmethod
    def _safe_bool(cls, name: str, default: Optional[bool]) -> Optional[bool]:
        """
        Safely parse boolean from environment.

        Recognizes: true/false, yes/no, 1/0, on/off (case-insensitive).
        """
        key = cls._key(name)
        raw_value = os.getenv(key)

        if raw_value is None:
            cls._metrics.record_env_load(key, False, default)
            return default

        normalized = raw_value.lower().strip()
        if normalized in {"true", "yes", "1", "on"}:
            value = True
        elif normalized in {"false", "no", "0", "off"}:
            value = False
        else:
            cls._reject(key, f"{key}='{raw_value}' is not a valid boolean, using default {default}")
            return default

        cls._metrics.record_env_load(key, True, default)
        return value

    @classmethod
    def _safe_str(cls, name: str, default: str) -> str:
        key = cls._key(name)
        value = os.getenv(key, default)
        cls._metrics.record_env_load(key, key in os.environ, default)
        return value

    # =========================================================================
    # Configuration Loading
    # =========================================================================

    @classmethod
    def load(cls) -> None:
        """
        Load all configuration from environment variables with validation.

        Called automatically on module import; call again to pick up
        changed environment variables (tests do this via monkeypatch).
        """
        cls._metrics = _ConfigLoadMetrics()

        cls.ENVIRONMENT = Environment.from_string(
            cls._safe_str("ENVIRONMENT", Environment.DEVELOPMENT.value)
        ).value

        log_level = cls._safe_str("LOG_LEVEL", "INFO").upper()
        if log_level not in cls.VALID_LOG_LEVELS:
            cls._reject(cls._key("LOG_LEVEL"), f"Invalid LOG_LEVEL '{log_level}', using INFO")
            log_level = "INFO"
        cls.LOG_LEVEL = log_level

        cls.LOG_JSON = cls._safe_bool("LOG_JSON", None)
        cls.LOG_PROPAGATE = bool(cls._safe_bool("LOG_PROPAGATE", True))

        cls._metrics.last_reload = datetime.now(timezone.utc).isoformat()

    # =========================================================================
    # Environment Checks
    # =========================================================================

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT == Environment.PRODUCTION.value

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT == Environment.DEVELOPMENT.value

    @classmethod
    def is_testing(cls) -> bool:
        """Check if running in testing environment."""
        return cls.ENVIRONMENT == Environment.TESTING.value

    # =========================================================================
    # Metrics & Summary
    # =========================================================================

    @classmethod
    def get_metrics(cls) -> _ConfigLoadMetrics:
        """Get configuration loading metrics."""
        return cls._metrics

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        """Get a configuration summary for debugging."""
        return {
            "environment": cls.ENVIRONMENT,
            "log_level": cls.LOG_LEVEL,
            "log_json": cls.LOG_JSON,
            "log_propagate": cls.LOG_PROPAGATE,
        }


# Auto-load on import
Config.load()
