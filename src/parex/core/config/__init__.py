"""
Parex configuration.

Exports the static, environment-driven configuration used by the logging
subsystem.
"""

from parex.core.config.config import Config, Environment

__all__ = [
    "Config",
    "Environment",
]
