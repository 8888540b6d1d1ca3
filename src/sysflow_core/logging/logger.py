"""Catalog logger - component-scoped colored or JSON logging."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from sysflow_core.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
)
from sysflow_core.types import LogFormat, LogLevel

COMPONENTS = ("registry", "validator", "config", "builtin")


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_context: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stderr)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {name: True for name in COMPONENTS}


class CatalogLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def registry(self) -> "RegistryLogger":
        """Get a logger for registry lifecycle events."""
        return RegistryLogger(self)

    def configure(self, config: LogConfig) -> None:
        """Replace the active configuration.

        Args:
            config: New logger configuration
        """
        self.config = config

    def debug(self, component: str, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.DEBUG, component, message, context)

    def info(self, component: str, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.INFO, component, message, context)

    def warn(self, component: str, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.WARN, component, message, context)

    def error(self, component: str, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.ERROR, component, message, context)

    def _should_log(self, level: LogLevel) -> bool:
        """Check if a log level should be logged.

        Args:
            level: Log level to check

        Returns:
            True if should log, False otherwise
        """
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (registry, validator, config, builtin)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "registry": MAGENTA,
            "validator": YELLOW,
            "config": ORANGE,
            "builtin": GREEN,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_context:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class RegistryLogger:
    """Logger for workflow registry events."""

    def __init__(self, parent: CatalogLogger):
        self.parent = parent

    def registered(self, system_slug: str, version: int, step_count: int) -> None:
        """Log an accepted definition.

        Args:
            system_slug: Slug of the registered workflow
            version: Definition version
            step_count: Number of steps in the definition
        """
        context = {
            "event": "workflow_registered",
            "system_slug": system_slug,
            "version": version,
            "step_count": step_count,
        }
        message = f"Workflow '{system_slug}' registered (v{version}, {step_count} steps) ✓"
        self.parent._log(LogLevel.INFO, "registry", message, context)

    def warned(self, system_slug: str, warnings: list[str]) -> None:
        """Log validation warnings for an accepted definition."""
        context = {
            "event": "workflow_warnings",
            "system_slug": system_slug,
            "warnings": warnings,
        }
        message = f"Workflow '{system_slug}' has {len(warnings)} validation warning(s)"
        self.parent._log(LogLevel.WARN, "validator", message, context)

    def rejected(self, system_slug: str, reason: str, errors: list[str] | None = None) -> None:
        """Log a rejected definition.

        Args:
            system_slug: Slug of the rejected workflow (may be empty)
            reason: Error code explaining the rejection
            errors: Individual structural errors, if any
        """
        context: dict[str, Any] = {
            "event": "workflow_rejected",
            "system_slug": system_slug,
            "reason": reason,
        }
        if errors:
            context["errors"] = errors

        message = f"Workflow '{system_slug}' rejected: {reason}"
        self.parent._log(LogLevel.ERROR, "registry", message, context)

    def directory_loaded(self, directory: str, count: int) -> None:
        """Log definitions loaded from an extra directory."""
        context = {
            "event": "directory_loaded",
            "directory": directory,
            "count": count,
        }
        message = f"Loaded {count} workflow definition(s) from {directory}"
        self.parent._log(LogLevel.INFO, "builtin", message, context)

    def frozen(self, count: int) -> None:
        """Log the end of registry initialization.

        Args:
            count: Number of registered workflows
        """
        context = {"event": "registry_frozen", "count": count}
        message = f"Workflow registry initialized ({count} workflows)"
        self.parent._log(LogLevel.INFO, "registry", message, context)
