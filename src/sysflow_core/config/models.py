"""Catalog configuration data models."""

from dataclasses import dataclass, field

from sysflow_core.logging import LogConfig
from sysflow_core.types import LogFormat, LogLevel


@dataclass
class WorkflowsConfig:
    """Workflow catalog sources."""

    builtin: bool = True  # Register the packaged built-in templates
    directories: list[str] = field(default_factory=list)  # Extra *.yaml definitions


@dataclass
class LoggingComponentsConfig:
    """Logging components configuration."""

    registry: bool = True
    validator: bool = True
    config: bool = True
    builtin: bool = True


@dataclass
class LoggingOptionsConfig:
    """Logging options configuration."""

    show_context: bool = True
    truncate_at: int = 200


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)
    options: LoggingOptionsConfig = field(default_factory=LoggingOptionsConfig)

    def to_log_config(self) -> LogConfig:
        """Build the logger configuration for this section."""
        return LogConfig(
            level=self.level,
            format=self.format,
            show_context=self.options.show_context,
            truncate_at=self.options.truncate_at,
            components={
                "registry": self.components.registry,
                "validator": self.components.validator,
                "config": self.components.config,
                "builtin": self.components.builtin,
            },
        )


@dataclass
class CatalogConfig:
    """Root configuration object."""

    workflows: WorkflowsConfig = field(default_factory=WorkflowsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
