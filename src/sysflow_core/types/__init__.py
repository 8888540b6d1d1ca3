"""Shared types for sysflow-core.

Import from here rather than submodules:
    from sysflow_core.types import LogLevel, ValidationResult
"""

from .enums import (
    LogFormat,
    LogLevel,
    Severity,
    StructuralErrorCode,
)
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "Severity",
    "StructuralErrorCode",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
