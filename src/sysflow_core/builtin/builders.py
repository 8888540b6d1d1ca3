"""Definition builders for the built-in system workflows.

Each builder returns a fully populated WorkflowDefinition parsed from the
YAML document packaged under ``definitions/``.
"""

from collections.abc import Callable
from importlib.resources import files

from sysflow_core.workflow import WorkflowDefinition, parse_workflow_yaml

WorkflowBuilder = Callable[[], WorkflowDefinition]


def load_definition(filename: str) -> WorkflowDefinition:
    """Parse a packaged definition document.

    Args:
        filename: File name inside the ``definitions`` directory

    Returns:
        Parsed (unvalidated) workflow definition
    """
    resource = files("sysflow_core.builtin").joinpath("definitions", filename)
    return parse_workflow_yaml(resource.read_text(encoding="utf-8"))


def copilot_workflow() -> WorkflowDefinition:
    """Copilot with generate, suggest, diagnose and optimize entry points."""
    return load_definition("copilot.yaml")


def ai_builder_workflow() -> WorkflowDefinition:
    """AI workflow builder with hearing, construct and refine entry points."""
    return load_definition("ai-builder.yaml")


def rag_workflow() -> WorkflowDefinition:
    """RAG indexing, question answering and knowledge-base chat."""
    return load_definition("rag.yaml")


def comprehensive_block_demo_workflow() -> WorkflowDefinition:
    return load_definition("comprehensive-block-demo.yaml")


def data_pipeline_block_demo_workflow() -> WorkflowDefinition:
    return load_definition("data-pipeline-block-demo.yaml")


def block_group_demo_workflow() -> WorkflowDefinition:
    """Parallel, try_catch, foreach and while groups with their output ports."""
    return load_definition("block-group-demo.yaml")


# Registration order of the built-in catalog
BUILTIN_BUILDERS: tuple[WorkflowBuilder, ...] = (
    copilot_workflow,
    ai_builder_workflow,
    rag_workflow,
    comprehensive_block_demo_workflow,
    data_pipeline_block_demo_workflow,
    block_group_demo_workflow,
)
