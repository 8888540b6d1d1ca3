"""Shared validation types for sysflow-core."""

from dataclasses import dataclass, field

from .enums import StructuralErrorCode


@dataclass
class ValidationIssue:
    """Single validation issue (error or warning).

    Used by:
    - ConfigLoader (config validation)
    - WorkflowValidator (structural validation)
    """

    path: str  # e.g., "edges[2].target_temp_id" or "workflows.directories"
    message: str  # Human-readable description
    severity: str = "error"  # "error" | "warning"
    code: StructuralErrorCode | None = None  # Set for workflow structure issues


@dataclass
class ValidationResult:
    """Result of validation (config or workflow).

    Used by:
    - ConfigLoader.validate()
    - WorkflowValidator.validate()
    - WorkflowRegistry.register()
    """

    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Ensure valid is False if there are errors."""
        if self.errors:
            self.valid = False

    def codes(self) -> list[StructuralErrorCode]:
        """Structural error codes in report order."""
        return [issue.code for issue in self.errors if issue.code is not None]

    def has_error(self, code: StructuralErrorCode) -> bool:
        """Check whether an error with the given code was reported."""
        return code in self.codes()
