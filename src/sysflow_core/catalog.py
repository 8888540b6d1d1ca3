"""Catalog composition - builds the process-wide workflow registry.

The registry is an explicitly constructed value owned by the caller:

    registry = new_registry()
    workflow = registry.get_by_slug("copilot")

Hot reload means building a new registry and swapping the reference, never
mutating a published one.
"""

from pathlib import Path
from typing import TextIO

from sysflow_core.builtin import register_builtin_workflows
from sysflow_core.config import CatalogConfig, ConfigLoader
from sysflow_core.logging import CatalogLogger
from sysflow_core.workflow import WorkflowRegistry


def new_registry(
    config: CatalogConfig | None = None,
    logger: CatalogLogger | None = None,
) -> WorkflowRegistry:
    """Build and freeze the workflow registry.

    Initialization sequence:
    1. Register built-in templates (unless ``workflows.builtin`` is false)
    2. Register each configured extra directory, in order
    3. Freeze

    Args:
        config: Catalog configuration (defaults to CatalogConfig())
        logger: Optional logger

    Returns:
        Frozen WorkflowRegistry

    Raises:
        CatalogError if any definition is rejected
    """
    config = config or CatalogConfig()
    registry = WorkflowRegistry(logger=logger)

    if config.workflows.builtin:
        register_builtin_workflows(registry)

    for directory in config.workflows.directories:
        registry.register_directory(directory)

    registry.freeze()
    return registry


def load_catalog(
    config_path: str | Path | None = None,
    log_output: TextIO | None = None,
) -> WorkflowRegistry:
    """Load configuration, set up logging and build the registry.

    Args:
        config_path: Path to config file (optional, see ConfigLoader.load)
        log_output: Output stream for logs (default: sys.stderr)

    Returns:
        Frozen WorkflowRegistry
    """
    loader = ConfigLoader()
    config = loader.load(config_path)

    log_config = config.logging.to_log_config()
    if log_output is not None:
        log_config.output = log_output
    logger = CatalogLogger(log_config)

    source = str(loader.config_path) if loader.config_path else "defaults"
    logger.info("config", f"Catalog configuration loaded from {source}", {"source": source})

    return new_registry(config, logger)
