"""Catalog logging - component-scoped colored or JSON logging."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from .logger import COMPONENTS, CatalogLogger, LogConfig, RegistryLogger

__all__ = [
    # Logger classes
    "CatalogLogger",
    "RegistryLogger",
    "LogConfig",
    "COMPONENTS",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
