"""Error registry for creating errors from templates."""

from typing import Any

from .errors import CatalogError, ErrorCategory, ErrorTemplate


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
    ) -> CatalogError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation

        Returns:
            CatalogError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        # Explicit detail in context wins over the template default
        detail = context.get("detail") or self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        source_path = context.get("source_path")

        return CatalogError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            system_slug=context.get("system_slug"),
            source_path=str(source_path) if source_path is not None else None,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # VALIDATION Errors
        self._templates["INPUT_INVALID"] = ErrorTemplate(
            code="INPUT_INVALID",
            category=ErrorCategory.VALIDATION,
            message_template="Invalid workflow definition document",
            suggestion_template="Check the YAML syntax and the document structure",
        )

        self._templates["WORKFLOW_INVALID"] = ErrorTemplate(
            code="WORKFLOW_INVALID",
            category=ErrorCategory.VALIDATION,
            message_template="Workflow '{system_slug}' failed structural validation",
            suggestion_template="Fix the definition builder for this workflow",
        )

        # WORKFLOW Errors
        self._templates["WORKFLOW_NOT_SYSTEM"] = ErrorTemplate(
            code="WORKFLOW_NOT_SYSTEM",
            category=ErrorCategory.WORKFLOW,
            message_template="Workflow '{system_slug}' is not marked as a system workflow",
            detail_template="Only definitions with is_system=true can be registered",
            suggestion_template="Set is_system to true in the definition",
        )

        self._templates["WORKFLOW_DUPLICATE_SLUG"] = ErrorTemplate(
            code="WORKFLOW_DUPLICATE_SLUG",
            category=ErrorCategory.WORKFLOW,
            message_template="Workflow slug '{system_slug}' is already registered",
            detail_template="Two definitions share the same system_slug",
            suggestion_template="Give each built-in workflow a unique system_slug",
        )

        self._templates["WORKFLOW_NOT_FOUND"] = ErrorTemplate(
            code="WORKFLOW_NOT_FOUND",
            category=ErrorCategory.WORKFLOW,
            message_template="Workflow '{system_slug}' not found",
            detail_template="No registered workflow has this system_slug",
            suggestion_template="Check the slug against the registered catalog",
        )

        self._templates["REGISTRY_FROZEN"] = ErrorTemplate(
            code="REGISTRY_FROZEN",
            category=ErrorCategory.WORKFLOW,
            message_template="Cannot register '{system_slug}': registry is frozen",
            detail_template="The registry is read-only once initialization has finished",
            suggestion_template="Build a new registry instead of modifying a published one",
        )

        # CONFIG Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Invalid configuration",
            suggestion_template="Check the configuration file and environment variables",
        )
