"""Catalog configuration - config loading and models."""

from .loader import CONFIG_PATH_ENV, ConfigLoader, resolve_env_vars
from .models import (
    CatalogConfig,
    LoggingComponentsConfig,
    LoggingConfig,
    LoggingOptionsConfig,
    WorkflowsConfig,
)

__all__ = [
    # Config models
    "CatalogConfig",
    "WorkflowsConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    "LoggingOptionsConfig",
    # Loader
    "ConfigLoader",
    "CONFIG_PATH_ENV",
    # Utilities
    "resolve_env_vars",
]
