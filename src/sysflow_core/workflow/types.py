"""Workflow definition data model.

Definitions are plain frozen values. Construction never validates; use
``validate_workflow`` to check structural integrity.

Sequences are stored as tuples and configuration payloads are deep-frozen
(mappings become read-only ``MappingProxyType`` views, lists become tuples),
so a published definition can be shared between readers.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# Step types that mark a workflow entry point
ENTRY_POINT_STEP_TYPES = frozenset({"start"})

Payload = Mapping[str, Any]


def freeze_payload(value: Any) -> Any:
    """Return a deep read-only copy of a JSON-shaped value.

    Args:
        value: Decoded payload (dicts, lists, scalars)

    Returns:
        Same structure with mappings wrapped in MappingProxyType and
        lists converted to tuples
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_payload(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_payload(item) for item in value)
    return value


def thaw_payload(value: Any) -> Any:
    """Inverse of ``freeze_payload``: a fresh mutable dict/list copy."""
    if isinstance(value, Mapping):
        return {key: thaw_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw_payload(item) for item in value]
    return value


def _freeze_fields(instance: Any, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(instance, name)
        if value is not None:
            object.__setattr__(instance, name, freeze_payload(value))


@dataclass(frozen=True)
class StepDefinition:
    """Workflow step definition."""

    temp_id: str  # Workflow-local id used by edges and group membership
    name: str
    type: str  # Block type handled by the engine (e.g. "start", "llm", "function")

    # Opaque payloads interpreted by the execution engine
    config: Payload | None = None
    trigger_type: str | None = None  # For start steps: manual, webhook, schedule, internal
    trigger_config: Payload | None = None

    # Canvas position
    position_x: int = 0
    position_y: int = 0

    block_slug: str | None = None  # Resolved to a block definition at migration time
    block_group_temp_id: str | None = None  # Parent block group

    # Tool exposure for entry steps inside agent groups
    tool_name: str | None = None
    tool_description: str | None = None
    tool_input_schema: Payload | None = None

    def __post_init__(self) -> None:
        _freeze_fields(self, ("config", "trigger_config", "tool_input_schema"))

    @property
    def is_entry_point(self) -> bool:
        """Whether this step can begin execution of the workflow."""
        return self.type in ENTRY_POINT_STEP_TYPES


@dataclass(frozen=True)
class EdgeDefinition:
    """Connection from a step or group output port to a step or group."""

    # Source (step XOR group)
    source_temp_id: str | None = None
    source_group_temp_id: str | None = None

    # Target (step XOR group)
    target_temp_id: str | None = None
    target_group_temp_id: str | None = None

    source_port: str = ""  # "output", "true", "false", a switch case label, ...
    target_port: str = ""
    condition: str | None = None


@dataclass(frozen=True)
class BlockGroupDefinition:
    """Composite container (agent, parallel, try_catch, foreach, while)."""

    temp_id: str
    name: str
    type: str

    config: Payload | None = None
    parent_temp_id: str | None = None  # Enclosing group, for nesting

    # Layout
    position_x: int = 0
    position_y: int = 0
    width: int = 0
    height: int = 0

    pre_process: str | None = None  # External IN -> internal IN
    post_process: str | None = None  # Internal OUT -> external OUT

    def __post_init__(self) -> None:
        _freeze_fields(self, ("config",))


@dataclass(frozen=True)
class WorkflowDefinition:
    """Complete system workflow template."""

    # Metadata
    id: str
    system_slug: str
    name: str
    description: str = ""
    version: int = 1
    is_system: bool = True

    # Schema
    input_schema: Payload | None = None
    output_schema: Payload | None = None

    # Structure
    steps: tuple[StepDefinition, ...] = field(default_factory=tuple)
    edges: tuple[EdgeDefinition, ...] = field(default_factory=tuple)
    block_groups: tuple[BlockGroupDefinition, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Store sections as tuples and freeze the schema payloads."""
        for name in ("steps", "edges", "block_groups"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        _freeze_fields(self, ("input_schema", "output_schema"))

    def get_step(self, temp_id: str) -> StepDefinition | None:
        """Get step by temp ID.

        Args:
            temp_id: Step temp identifier

        Returns:
            First step with this temp ID or None if not found
        """
        for step in self.steps:
            if step.temp_id == temp_id:
                return step
        return None

    def get_block_group(self, temp_id: str) -> BlockGroupDefinition | None:
        """Get block group by temp ID."""
        for group in self.block_groups:
            if group.temp_id == temp_id:
                return group
        return None

    def step_temp_ids(self) -> set[str]:
        """Temp IDs of all steps."""
        return {step.temp_id for step in self.steps}

    def block_group_temp_ids(self) -> set[str]:
        """Temp IDs of all block groups."""
        return {group.temp_id for group in self.block_groups}

    def entry_steps(self) -> list[StepDefinition]:
        """Steps that can begin execution, in definition order."""
        return [step for step in self.steps if step.is_entry_point]

    def group_members(self, group_temp_id: str) -> list[StepDefinition]:
        """Steps whose parent block group is ``group_temp_id``.

        Only direct members are returned; steps of nested groups belong
        to those groups.
        """
        return [step for step in self.steps if step.block_group_temp_id == group_temp_id]

    def child_groups(self, group_temp_id: str) -> list[BlockGroupDefinition]:
        """Block groups nested directly inside ``group_temp_id``."""
        return [group for group in self.block_groups if group.parent_temp_id == group_temp_id]
