"""Structural validation of workflow definitions."""

from sysflow_core.types import (
    Severity,
    StructuralErrorCode,
    ValidationIssue,
    ValidationResult,
)

from .types import EdgeDefinition, WorkflowDefinition


def _error(code: StructuralErrorCode, path: str, message: str) -> ValidationIssue:
    return ValidationIssue(path=path, message=message, severity=Severity.ERROR, code=code)


def _warning(code: StructuralErrorCode, path: str, message: str) -> ValidationIssue:
    return ValidationIssue(path=path, message=message, severity=Severity.WARNING, code=code)


class WorkflowValidator:
    """Validate the structure of workflow definitions.

    Only graph integrity is checked. Step and group types, ports, conditions
    and configuration payloads are left to the execution engine.
    """

    def validate(self, workflow: WorkflowDefinition) -> ValidationResult:
        """Validate workflow definition.

        Checks:
        - system_slug and name present
        - At least one step
        - Temp IDs present and unique across steps and block groups
        - At least one entry-point step
        - Edge sources and targets resolve (step XOR group on each end)
        - Block group references resolve, group nesting is acyclic

        Args:
            workflow: Workflow to validate

        Returns:
            ValidationResult with every error and warning found
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        # Required fields
        if not workflow.system_slug:
            errors.append(
                _error(
                    StructuralErrorCode.MISSING_SLUG,
                    "system_slug",
                    "system_slug is required",
                )
            )

        if not workflow.name:
            errors.append(
                _error(StructuralErrorCode.MISSING_NAME, "name", "name is required")
            )

        if not workflow.steps:
            errors.append(
                _error(
                    StructuralErrorCode.NO_STEPS,
                    "steps",
                    "at least one step is required",
                )
            )

        step_ids, group_ids = self._check_temp_ids(workflow, errors)

        if workflow.steps and not any(step.is_entry_point for step in workflow.steps):
            errors.append(
                _error(
                    StructuralErrorCode.NO_START_STEP,
                    "steps",
                    "workflow must have a start step",
                )
            )

        for index, edge in enumerate(workflow.edges):
            self._check_edge(index, edge, step_ids, group_ids, errors)

        # Group membership
        for index, step in enumerate(workflow.steps):
            if step.block_group_temp_id and step.block_group_temp_id not in group_ids:
                errors.append(
                    _error(
                        StructuralErrorCode.INVALID_BLOCK_GROUP_REFERENCE,
                        f"steps[{index}].block_group_temp_id",
                        f"step '{step.name}' references unknown block group: "
                        f"{step.block_group_temp_id}",
                    )
                )

        for index, group in enumerate(workflow.block_groups):
            if group.parent_temp_id and group.parent_temp_id not in group_ids:
                errors.append(
                    _error(
                        StructuralErrorCode.INVALID_BLOCK_GROUP_REFERENCE,
                        f"block_groups[{index}].parent_temp_id",
                        f"block group '{group.name}' references unknown parent group: "
                        f"{group.parent_temp_id}",
                    )
                )

        errors.extend(self._check_group_nesting(workflow))

        # Informational fields
        if not workflow.description:
            warnings.append(
                _warning(
                    StructuralErrorCode.MISSING_DESCRIPTION,
                    "description",
                    "description is empty",
                )
            )
        if workflow.version < 1:
            warnings.append(
                _warning(
                    StructuralErrorCode.INVALID_VERSION,
                    "version",
                    f"version should be a positive integer, got {workflow.version}",
                )
            )

        return ValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    def _check_temp_ids(
        self,
        workflow: WorkflowDefinition,
        errors: list[ValidationIssue],
    ) -> tuple[set[str], set[str]]:
        """Check the shared step/group temp ID namespace.

        Returns:
            Known step temp IDs and known group temp IDs
        """
        step_ids: set[str] = set()
        group_ids: set[str] = set()
        reported: set[str] = set()

        for index, step in enumerate(workflow.steps):
            if not step.temp_id:
                errors.append(
                    _error(
                        StructuralErrorCode.MISSING_TEMP_ID,
                        f"steps[{index}].temp_id",
                        f"temp_id is required for all steps (step '{step.name}')",
                    )
                )
                continue
            if step.temp_id in step_ids:
                if step.temp_id not in reported:
                    errors.append(
                        _error(
                            StructuralErrorCode.DUPLICATE_TEMP_ID,
                            f"steps[{index}].temp_id",
                            f"duplicate temp_id: {step.temp_id}",
                        )
                    )
                    reported.add(step.temp_id)
                continue
            step_ids.add(step.temp_id)

        for index, group in enumerate(workflow.block_groups):
            if not group.temp_id:
                errors.append(
                    _error(
                        StructuralErrorCode.MISSING_TEMP_ID,
                        f"block_groups[{index}].temp_id",
                        f"temp_id is required for all block groups (group '{group.name}')",
                    )
                )
                continue
            if group.temp_id in group_ids or group.temp_id in step_ids:
                if group.temp_id not in reported:
                    errors.append(
                        _error(
                            StructuralErrorCode.DUPLICATE_TEMP_ID,
                            f"block_groups[{index}].temp_id",
                            f"duplicate temp_id: {group.temp_id}",
                        )
                    )
                    reported.add(group.temp_id)
                continue
            group_ids.add(group.temp_id)

        return step_ids, group_ids

    def _check_edge(
        self,
        index: int,
        edge: EdgeDefinition,
        step_ids: set[str],
        group_ids: set[str],
        errors: list[ValidationIssue],
    ) -> None:
        path = f"edges[{index}]"

        # Source
        if edge.source_temp_id and edge.source_group_temp_id:
            errors.append(
                _error(
                    StructuralErrorCode.AMBIGUOUS_EDGE_SOURCE,
                    path,
                    "edge must have source_temp_id or source_group_temp_id, not both",
                )
            )
        elif edge.source_temp_id:
            if edge.source_temp_id not in step_ids:
                errors.append(
                    _error(
                        StructuralErrorCode.INVALID_SOURCE_TEMP_ID,
                        f"{path}.source_temp_id",
                        f"invalid source_temp_id: {edge.source_temp_id}",
                    )
                )
        elif edge.source_group_temp_id:
            if edge.source_group_temp_id not in group_ids:
                errors.append(
                    _error(
                        StructuralErrorCode.INVALID_SOURCE_TEMP_ID,
                        f"{path}.source_group_temp_id",
                        f"invalid source_group_temp_id: {edge.source_group_temp_id}",
                    )
                )
        else:
            errors.append(
                _error(
                    StructuralErrorCode.MISSING_EDGE_SOURCE,
                    path,
                    "edge must have source_temp_id or source_group_temp_id",
                )
            )

        # Target
        if edge.target_temp_id and edge.target_group_temp_id:
            errors.append(
                _error(
                    StructuralErrorCode.AMBIGUOUS_EDGE_TARGET,
                    path,
                    "edge must have target_temp_id or target_group_temp_id, not both",
                )
            )
        elif edge.target_temp_id:
            if edge.target_temp_id not in step_ids:
                errors.append(
                    _error(
                        StructuralErrorCode.INVALID_TARGET_TEMP_ID,
                        f"{path}.target_temp_id",
                        f"invalid target_temp_id: {edge.target_temp_id}",
                    )
                )
        elif edge.target_group_temp_id:
            if edge.target_group_temp_id not in group_ids:
                errors.append(
                    _error(
                        StructuralErrorCode.INVALID_TARGET_TEMP_ID,
                        f"{path}.target_group_temp_id",
                        f"invalid target_group_temp_id: {edge.target_group_temp_id}",
                    )
                )
        else:
            errors.append(
                _error(
                    StructuralErrorCode.MISSING_EDGE_TARGET,
                    path,
                    "edge must have target_temp_id or target_group_temp_id",
                )
            )

    def _check_group_nesting(self, workflow: WorkflowDefinition) -> list[ValidationIssue]:
        """Detect cycles in block group parent links.

        Each cycle is reported once, naming its members in sorted order.
        """
        parents = {
            group.temp_id: group.parent_temp_id
            for group in workflow.block_groups
            if group.temp_id
        }
        cycles: list[frozenset[str]] = []

        for start in parents:
            chain: list[str] = []
            current: str | None = start
            while current is not None and current in parents and current not in chain:
                chain.append(current)
                current = parents[current]
            if current is not None and current in chain:
                cycle = frozenset(chain[chain.index(current) :])
                if cycle not in cycles:
                    cycles.append(cycle)

        return [
            _error(
                StructuralErrorCode.CIRCULAR_GROUP_NESTING,
                "block_groups",
                f"circular block group nesting: {', '.join(sorted(cycle))}",
            )
            for cycle in cycles
        ]


_default_validator = WorkflowValidator()


def validate_workflow(workflow: WorkflowDefinition) -> ValidationResult:
    """Validate a workflow definition outside any registry.

    Args:
        workflow: Workflow to validate

    Returns:
        ValidationResult; ``valid`` is False if any structural error exists
    """
    return _default_validator.validate(workflow)
