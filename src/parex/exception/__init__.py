"""
Parameterized exception package.

Exports
-------
- ParameterizedException: base of every category/error-code exception family
- ExceptionBuilder: fluent, validating construction of those exceptions
- IndexedParams / NamedParams: tagged parameter-source results
- ExceptionErrors / TemplateErrors: message template sources
- CategoryRegistry / get_default_registry: category ownership registry
- CategoryRange and the reserved ranges
- make_string: template substitution
"""

from parex.exception.builder import ExceptionBuilder, IndexedParams, NamedParams
from parex.exception.categories import (
    BASE,
    CORNERSTONE,
    FRAMEWORK,
    CategoryRange,
    is_reserved,
)
from parex.exception.errors import ExceptionErrors, TemplateErrors
from parex.exception.formatting import make_string
from parex.exception.parameterized import ExceptionFields, ParameterizedException
from parex.exception.registry import (
    CategoryRegistry,
    get_default_registry,
    is_ancestor,
)

__all__ = [
    "ParameterizedException",
    "ExceptionFields",
    "ExceptionBuilder",
    "IndexedParams",
    "NamedParams",
    "ExceptionErrors",
    "TemplateErrors",
    "CategoryRegistry",
    "get_default_registry",
    "is_ancestor",
    "CategoryRange",
    "FRAMEWORK",
    "BASE",
    "CORNERSTONE",
    "is_reserved",
    "make_string",
]
