"""Workflow definition model, validation and registry."""

from .parser import parse_workflow_dict, parse_workflow_yaml, workflow_to_dict
from .registry import WorkflowEntry, WorkflowRegistry
from .types import (
    ENTRY_POINT_STEP_TYPES,
    BlockGroupDefinition,
    EdgeDefinition,
    StepDefinition,
    WorkflowDefinition,
)
from .validator import WorkflowValidator, validate_workflow

__all__ = [
    "WorkflowDefinition",
    "StepDefinition",
    "EdgeDefinition",
    "BlockGroupDefinition",
    "ENTRY_POINT_STEP_TYPES",
    "WorkflowEntry",
    "WorkflowRegistry",
    "WorkflowValidator",
    "validate_workflow",
    "parse_workflow_yaml",
    "parse_workflow_dict",
    "workflow_to_dict",
]
