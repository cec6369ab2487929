"""
Parex: parameterized exceptions with category ownership.

Every exception family owns a category id; each exception carries an error
code within that category and renders its message from a template plus
indexed or named variables.
"""

from parex.core.exceptions import (
    CategoryConflictError,
    ErrorSeverity,
    InvalidArgumentError,
    ParexError,
    PreconditionError,
    UnsupportedTypeError,
)
from parex.exception import (
    CategoryRegistry,
    ExceptionBuilder,
    ExceptionErrors,
    IndexedParams,
    NamedParams,
    ParameterizedException,
    TemplateErrors,
    get_default_registry,
)

__version__ = "1.0.0"

__all__ = [
    "ParameterizedException",
    "ExceptionBuilder",
    "IndexedParams",
    "NamedParams",
    "ExceptionErrors",
    "TemplateErrors",
    "CategoryRegistry",
    "get_default_registry",
    "ErrorSeverity",
    "ParexError",
    "PreconditionError",
    "InvalidArgumentError",
    "CategoryConflictError",
    "UnsupportedTypeError",
]
