"""Built-in system workflow templates."""

from typing import TYPE_CHECKING

from .builders import (
    BUILTIN_BUILDERS,
    WorkflowBuilder,
    ai_builder_workflow,
    block_group_demo_workflow,
    comprehensive_block_demo_workflow,
    copilot_workflow,
    data_pipeline_block_demo_workflow,
    load_definition,
    rag_workflow,
)

if TYPE_CHECKING:
    from sysflow_core.workflow import WorkflowRegistry


def register_builtin_workflows(registry: "WorkflowRegistry") -> int:
    """Register every built-in workflow.

    Args:
        registry: Registry being initialized

    Returns:
        Number of workflows registered

    Raises:
        CatalogError if any built-in is rejected
    """
    for builder in BUILTIN_BUILDERS:
        registry.register(builder(), source="builtin")
    return len(BUILTIN_BUILDERS)


__all__ = [
    "BUILTIN_BUILDERS",
    "WorkflowBuilder",
    "load_definition",
    "register_builtin_workflows",
    "copilot_workflow",
    "ai_builder_workflow",
    "rag_workflow",
    "comprehensive_block_demo_workflow",
    "data_pipeline_block_demo_workflow",
    "block_group_demo_workflow",
]
