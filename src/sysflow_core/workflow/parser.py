"""YAML workflow definition parsing and serialization."""

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from sysflow_core.errors import create_error

from .types import (
    BlockGroupDefinition,
    EdgeDefinition,
    StepDefinition,
    WorkflowDefinition,
    thaw_payload,
)

_STEP_KEYS = frozenset(f.name for f in fields(StepDefinition))
_EDGE_KEYS = frozenset(f.name for f in fields(EdgeDefinition))
_GROUP_KEYS = frozenset(f.name for f in fields(BlockGroupDefinition))
_WORKFLOW_KEYS = frozenset(f.name for f in fields(WorkflowDefinition))

_BLOB_KEYS = frozenset(
    {"config", "trigger_config", "tool_input_schema", "input_schema", "output_schema"}
)
_INT_KEYS = frozenset({"position_x", "position_y", "width", "height"})
_WORKFLOW_TEXT_KEYS = ("id", "system_slug", "name", "description")


def parse_workflow_yaml(
    yaml_content: str,
    source_path: Path | None = None,
) -> WorkflowDefinition:
    """Parse YAML content into WorkflowDefinition.

    Args:
        yaml_content: YAML content to parse
        source_path: Optional source file path, used in error context

    Returns:
        Parsed workflow definition (not validated)

    Raises:
        CatalogError(INPUT_INVALID) if YAML is invalid or malformed
    """
    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise create_error(
            "INPUT_INVALID", detail=f"Invalid YAML: {e}", source_path=source_path
        ) from e

    if not isinstance(data, dict):
        raise create_error(
            "INPUT_INVALID", detail="YAML must be a dictionary", source_path=source_path
        )

    return parse_workflow_dict(data, source_path=source_path)


def parse_workflow_dict(
    data: dict[str, Any],
    source_path: Path | None = None,
) -> WorkflowDefinition:
    """Build a WorkflowDefinition from a decoded document.

    Missing structural fields become empty values so the validator can
    report them; only type-level problems are rejected here.

    Args:
        data: Decoded definition document
        source_path: Optional source file path, used in error context

    Returns:
        Parsed workflow definition (not validated)

    Raises:
        CatalogError(INPUT_INVALID) on unknown keys or wrongly typed fields
    """
    _reject_unknown_keys(data, _WORKFLOW_KEYS, "workflow", source_path)

    for key in _WORKFLOW_TEXT_KEYS:
        _check_type(data.get(key), str, key, source_path)
    for key in ("input_schema", "output_schema"):
        _check_type(data.get(key), dict, key, source_path)

    is_system = data.get("is_system", True)
    if not isinstance(is_system, bool):
        raise create_error(
            "INPUT_INVALID",
            detail=f"is_system must be a boolean, got {is_system!r}",
            source_path=source_path,
        )

    version = data.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool):
        raise create_error(
            "INPUT_INVALID",
            detail=f"version must be an integer, got {version!r}",
            source_path=source_path,
        )

    steps = tuple(
        StepDefinition(**_section_item(item, _STEP_KEYS, f"steps[{i}]", source_path))
        for i, item in enumerate(_section(data, "steps", source_path))
    )
    edges = tuple(
        EdgeDefinition(**_section_item(item, _EDGE_KEYS, f"edges[{i}]", source_path))
        for i, item in enumerate(_section(data, "edges", source_path))
    )
    block_groups = tuple(
        BlockGroupDefinition(
            **_section_item(item, _GROUP_KEYS, f"block_groups[{i}]", source_path)
        )
        for i, item in enumerate(_section(data, "block_groups", source_path))
    )

    return WorkflowDefinition(
        id=_text(data.get("id")),
        system_slug=_text(data.get("system_slug")),
        name=_text(data.get("name")),
        description=_text(data.get("description")),
        version=version,
        is_system=is_system,
        input_schema=data.get("input_schema"),
        output_schema=data.get("output_schema"),
        steps=steps,
        edges=edges,
        block_groups=block_groups,
    )


def workflow_to_dict(workflow: WorkflowDefinition) -> dict[str, Any]:
    """Serialize a definition into a detached, JSON-shaped dict.

    Configuration payloads are deep-copied so the result can be modified
    freely without touching the definition.

    Args:
        workflow: Workflow definition

    Returns:
        Dict using the definition document field names
    """
    return {
        "id": workflow.id,
        "system_slug": workflow.system_slug,
        "name": workflow.name,
        "description": workflow.description,
        "version": workflow.version,
        "is_system": workflow.is_system,
        "input_schema": thaw_payload(workflow.input_schema),
        "output_schema": thaw_payload(workflow.output_schema),
        "steps": [_to_dict(step) for step in workflow.steps],
        "edges": [_to_dict(edge) for edge in workflow.edges],
        "block_groups": [_to_dict(group) for group in workflow.block_groups],
    }


def _to_dict(item: StepDefinition | EdgeDefinition | BlockGroupDefinition) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for f in fields(item):
        value = getattr(item, f.name)
        result[f.name] = thaw_payload(value) if f.name in _BLOB_KEYS else value
    return result


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _section(
    data: dict[str, Any],
    key: str,
    source_path: Path | None,
) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise create_error(
            "INPUT_INVALID",
            detail=f"{key} must be a list",
            source_path=source_path,
        )
    return value


def _section_item(
    item: Any,
    allowed: frozenset[str],
    path: str,
    source_path: Path | None,
) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise create_error(
            "INPUT_INVALID",
            detail=f"{path} must be a dictionary",
            source_path=source_path,
        )
    _reject_unknown_keys(item, allowed, path, source_path)

    kwargs = dict(item)
    # Identity fields and ports default to empty strings
    for key in ("temp_id", "name", "type", "source_port", "target_port"):
        if key in allowed and kwargs.get(key) is None:
            kwargs[key] = ""
    # YAML 1.1 reads unquoted true/false ports as booleans
    for key in ("source_port", "target_port"):
        if isinstance(kwargs.get(key), bool):
            kwargs[key] = str(kwargs[key]).lower()

    for key, value in kwargs.items():
        if key in _BLOB_KEYS:
            expected: type = dict
        elif key in _INT_KEYS:
            expected = int
        else:
            expected = str
        _check_type(value, expected, f"{path}.{key}", source_path)
    return kwargs


def _reject_unknown_keys(
    data: dict[str, Any],
    allowed: frozenset[str],
    path: str,
    source_path: Path | None,
) -> None:
    unknown = sorted(str(key) for key in data if key not in allowed)
    if unknown:
        raise create_error(
            "INPUT_INVALID",
            detail=f"Unknown key(s) in {path}: {', '.join(unknown)}",
            source_path=source_path,
        )


def _check_type(value: Any, expected: type, path: str, source_path: Path | None) -> None:
    """Reject a present value of the wrong type. ``None`` is always accepted."""
    if value is None:
        return
    # bool is an int subclass but never a valid position or size
    if isinstance(value, expected) and not (expected is int and isinstance(value, bool)):
        return
    raise create_error(
        "INPUT_INVALID",
        detail=f"{path} must be of type {expected.__name__}, got {type(value).__name__}",
        source_path=source_path,
    )
