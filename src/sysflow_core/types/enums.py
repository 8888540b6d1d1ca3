"""Shared enumerations for sysflow-core."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class Severity(str, Enum):
    """Validation issue severity."""

    ERROR = "error"
    WARNING = "warning"


class StructuralErrorCode(str, Enum):
    """Structural defects the workflow validator can report."""

    MISSING_SLUG = "MISSING_SLUG"
    MISSING_NAME = "MISSING_NAME"
    NO_STEPS = "NO_STEPS"
    MISSING_TEMP_ID = "MISSING_TEMP_ID"
    DUPLICATE_TEMP_ID = "DUPLICATE_TEMP_ID"
    NO_START_STEP = "NO_START_STEP"
    MISSING_EDGE_SOURCE = "MISSING_EDGE_SOURCE"
    AMBIGUOUS_EDGE_SOURCE = "AMBIGUOUS_EDGE_SOURCE"
    INVALID_SOURCE_TEMP_ID = "INVALID_SOURCE_TEMP_ID"
    MISSING_EDGE_TARGET = "MISSING_EDGE_TARGET"
    AMBIGUOUS_EDGE_TARGET = "AMBIGUOUS_EDGE_TARGET"
    INVALID_TARGET_TEMP_ID = "INVALID_TARGET_TEMP_ID"
    INVALID_BLOCK_GROUP_REFERENCE = "INVALID_BLOCK_GROUP_REFERENCE"
    CIRCULAR_GROUP_NESTING = "CIRCULAR_GROUP_NESTING"

    # Warnings
    MISSING_DESCRIPTION = "MISSING_DESCRIPTION"
    INVALID_VERSION = "INVALID_VERSION"

