"""Catalog error handling - Structured errors with context."""

from .errors import CatalogError, ErrorCategory, ErrorTemplate
from .factory import ErrorFactory, create_error, get_error_factory
from .registry import ErrorRegistry

__all__ = [
    # Core error types
    "CatalogError",
    "ErrorCategory",
    "ErrorTemplate",
    # Registry and factory
    "ErrorRegistry",
    "ErrorFactory",
    # Convenience functions
    "get_error_factory",
    "create_error",
]
