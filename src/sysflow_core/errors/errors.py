"""Catalog error types."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    WORKFLOW = "WORKFLOW"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"


@dataclass
class CatalogError(Exception):
    """Structured error with context. Base exception for all catalog errors."""

    # Identity
    code: str  # e.g., "WORKFLOW_DUPLICATE_SLUG"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Context
    system_slug: str | None = None  # Which workflow definition
    source_path: str | None = None  # Which file, for YAML-backed definitions

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for reporting.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "system_slug": self.system_slug,
            "source_path": self.source_path,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Workflow '{system_slug}' not found"
    detail_template: str | None = None
    suggestion_template: str | None = None
