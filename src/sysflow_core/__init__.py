"""sysflow-core - catalog of built-in system workflow templates.

Holds the workflow definition model, its structural validator and the
registry that indexes the built-in templates by system_slug.
"""

from sysflow_core.catalog import load_catalog, new_registry
from sysflow_core.workflow import WorkflowRegistry, validate_workflow

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "new_registry",
    "load_catalog",
    "validate_workflow",
    "WorkflowRegistry",
]
