"""Workflow Registry implementation."""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sysflow_core.errors import create_error
from sysflow_core.types import ValidationResult

from .parser import parse_workflow_yaml, workflow_to_dict
from .types import WorkflowDefinition
from .validator import WorkflowValidator

if TYPE_CHECKING:
    from sysflow_core.logging import CatalogLogger


@dataclass(frozen=True)
class WorkflowEntry:
    """Entry in workflow registry."""

    workflow: WorkflowDefinition
    registered_at: str
    source: str  # "builtin" | "file"


class WorkflowRegistry:
    """Catalog of system workflow definitions keyed by system_slug.

    Filled once by a single writer, then frozen. After ``freeze()`` the
    registry is read-only and may be shared between readers without
    locking. Any rejected definition raises: built-in templates are code,
    so a bad one must stop initialization.
    """

    def __init__(self, logger: "CatalogLogger | None" = None):
        """Initialize workflow registry.

        Args:
            logger: Optional logger
        """
        self._workflows: dict[str, WorkflowEntry] = {}
        self._validator = WorkflowValidator()
        self._logger = logger.registry() if logger else None
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(
        self,
        workflow: WorkflowDefinition,
        source: str = "builtin",
    ) -> ValidationResult:
        """Validate and register a workflow.

        Args:
            workflow: Workflow to register
            source: Where the definition came from ("builtin" or "file")

        Returns:
            ValidationResult of the accepted definition (may carry warnings)

        Raises:
            CatalogError(REGISTRY_FROZEN) if the registry was frozen
            CatalogError(WORKFLOW_NOT_SYSTEM) if is_system is false
            CatalogError(WORKFLOW_INVALID) if structural validation fails
            CatalogError(WORKFLOW_DUPLICATE_SLUG) if the slug is taken
        """
        slug = workflow.system_slug

        if self._frozen:
            self._reject(slug, "REGISTRY_FROZEN")
            raise create_error("REGISTRY_FROZEN", system_slug=slug)

        if not workflow.is_system:
            self._reject(slug, "WORKFLOW_NOT_SYSTEM")
            raise create_error("WORKFLOW_NOT_SYSTEM", system_slug=slug)

        result = self._validator.validate(workflow)
        if not result.valid:
            error_msgs = [f"{e.path}: {e.message}" for e in result.errors]
            self._reject(slug, "WORKFLOW_INVALID", error_msgs)
            raise create_error(
                "WORKFLOW_INVALID",
                system_slug=slug or workflow.name or workflow.id,
                detail="; ".join(error_msgs),
            )

        if slug in self._workflows:
            self._reject(slug, "WORKFLOW_DUPLICATE_SLUG")
            raise create_error("WORKFLOW_DUPLICATE_SLUG", system_slug=slug)

        self._workflows[slug] = WorkflowEntry(
            workflow=workflow,
            registered_at=datetime.now(UTC).isoformat(),
            source=source,
        )

        if self._logger:
            self._logger.registered(slug, workflow.version, len(workflow.steps))
            if result.warnings:
                self._logger.warned(slug, [f"{w.path}: {w.message}" for w in result.warnings])

        return result

    def register_from_yaml(
        self,
        yaml_content: str,
        source_path: Path | None = None,
    ) -> ValidationResult:
        """Parse and register workflow from YAML.

        Args:
            yaml_content: YAML content
            source_path: Optional source file path

        Returns:
            ValidationResult

        Raises:
            CatalogError if parsing or registration fails
        """
        workflow = parse_workflow_yaml(yaml_content, source_path)
        return self.register(workflow, source="file")

    def register_directory(self, directory: str | Path) -> int:
        """Register every ``*.yaml`` definition in a directory.

        Files are registered in name order. The first failure propagates.

        Args:
            directory: Directory containing definition documents

        Returns:
            Number of workflows registered

        Raises:
            CatalogError(CONFIG_INVALID) if the directory does not exist
            CatalogError from parsing or registration
        """
        workflows_dir = Path(directory)
        if not workflows_dir.is_dir():
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Workflow directory not found: {workflows_dir}",
            )

        count = 0
        for yaml_file in sorted(workflows_dir.glob("*.yaml")):
            self.register_from_yaml(yaml_file.read_text(encoding="utf-8"), source_path=yaml_file)
            count += 1

        if self._logger:
            self._logger.directory_loaded(str(workflows_dir), count)

        return count

    def freeze(self) -> None:
        """End initialization. Further registrations are rejected."""
        if self._frozen:
            return
        self._frozen = True
        if self._logger:
            self._logger.frozen(len(self._workflows))

    def get_by_slug(self, slug: str) -> WorkflowDefinition | None:
        """Get workflow by system_slug.

        Args:
            slug: Workflow system_slug

        Returns:
            Workflow definition or None if not found
        """
        entry = self._workflows.get(slug)
        return entry.workflow if entry else None

    def get_or_raise(self, slug: str) -> WorkflowDefinition:
        """Get workflow by system_slug, raise if not found.

        Raises:
            CatalogError(WORKFLOW_NOT_FOUND)
        """
        workflow = self.get_by_slug(slug)
        if workflow is None:
            raise create_error("WORKFLOW_NOT_FOUND", system_slug=slug)
        return workflow

    def get_entry(self, slug: str) -> WorkflowEntry | None:
        """Get the registry entry (definition plus registration metadata)."""
        return self._workflows.get(slug)

    def get_all(self) -> list[WorkflowDefinition]:
        """List all registered workflows in registration order."""
        return [entry.workflow for entry in self._workflows.values()]

    def slugs(self) -> list[str]:
        """Registered slugs in registration order."""
        return list(self._workflows)

    def count(self) -> int:
        """Number of registered workflows."""
        return len(self._workflows)

    def __len__(self) -> int:
        return len(self._workflows)

    def __contains__(self, slug: object) -> bool:
        return slug in self._workflows

    def snapshot(self, slug: str) -> dict[str, Any]:
        """Get a detached copy of a workflow for materialization.

        Args:
            slug: Workflow system_slug

        Returns:
            Workflow as a JSON-shaped dict; changes to it never reach the registry

        Raises:
            CatalogError(WORKFLOW_NOT_FOUND)
        """
        return workflow_to_dict(self.get_or_raise(slug))

    def _reject(self, slug: str, reason: str, errors: list[str] | None = None) -> None:
        if self._logger:
            self._logger.rejected(slug, reason, errors)
