"""Catalog configuration loader."""

import os
import re
import typing
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from sysflow_core.errors import create_error
from sysflow_core.types import LogFormat, LogLevel, ValidationIssue, ValidationResult

from .models import CatalogConfig

CONFIG_PATH_ENV = "SYSFLOW_CONFIG_PATH"
LOCAL_CONFIG_NAME = "sysflow-config.yaml"


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        CatalogError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    if isinstance(data, str):
        return resolve_env_vars(data)
    return data


class ConfigLoader:
    """Load and validate catalog configuration."""

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional CatalogLogger instance
        """
        self._config_path: Path | None = None
        self._logger = logger

    @property
    def config_path(self) -> Path | None:
        """Path of the last loaded file, if any."""
        return self._config_path

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> CatalogConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. SYSFLOW_CONFIG_PATH environment variable
        2. ./sysflow-config.yaml
        3. ~/.sysflow/config.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found

        Returns:
            Loaded CatalogConfig instance

        Raises:
            CatalogError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                if self._logger:
                    self._logger.info(
                        "config",
                        "No config file found, using default configuration",
                        {"path": str(config_path)},
                    )
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Config file must contain a mapping: {config_path}",
            )

        data = _resolve_env_vars_recursive(data)

        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> CatalogConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(
        self, data: dict[str, Any], config_path: Path | None = None
    ) -> CatalogConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded CatalogConfig instance

        Raises:
            CatalogError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        if self._logger:
            for warning in validation.warnings:
                self._logger.warn("config", warning.message, {"path": warning.path})

        try:
            config = self._dict_to_config(data)
        except (TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Failed to parse configuration: {e}",
            ) from e

        self._config_path = config_path

        if self._logger:
            self._logger.info("config", "Configuration loaded successfully")

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        valid_keys = {field.name for field in fields(CatalogConfig)}
        for key in data:
            if key not in valid_keys:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        if "workflows" in data:
            workflows = data["workflows"]
            if not isinstance(workflows, dict):
                errors.append(
                    ValidationIssue(
                        path="workflows",
                        message="workflows must be a dictionary",
                        severity="error",
                    )
                )
            else:
                if "builtin" in workflows and not isinstance(workflows["builtin"], bool):
                    errors.append(
                        ValidationIssue(
                            path="workflows.builtin",
                            message="builtin must be a boolean",
                            severity="error",
                        )
                    )
                directories = workflows.get("directories", [])
                if not isinstance(directories, list) or not all(
                    isinstance(d, str) for d in directories
                ):
                    errors.append(
                        ValidationIssue(
                            path="workflows.directories",
                            message="directories must be a list of paths",
                            severity="error",
                        )
                    )

        if "logging" in data:
            logging_data = data["logging"]
            if not isinstance(logging_data, dict):
                errors.append(
                    ValidationIssue(
                        path="logging",
                        message="logging must be a dictionary",
                        severity="error",
                    )
                )
            else:
                level = logging_data.get("level")
                if level is not None and level not in [lvl.value for lvl in LogLevel]:
                    errors.append(
                        ValidationIssue(
                            path="logging.level",
                            message=f"Unknown log level: {level}",
                            severity="error",
                        )
                    )
                fmt = logging_data.get("format")
                if fmt is not None and fmt not in [f.value for f in LogFormat]:
                    errors.append(
                        ValidationIssue(
                            path="logging.format",
                            message=f"Unknown log format: {fmt}",
                            severity="error",
                        )
                    )
                errors.extend(self._validate_logging_sections(logging_data))

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def _validate_logging_sections(self, logging_data: dict[str, Any]) -> list[ValidationIssue]:
        """Check the shape of logging.components and logging.options."""
        errors: list[ValidationIssue] = []

        components = logging_data.get("components")
        if components is not None:
            if not isinstance(components, dict):
                errors.append(
                    ValidationIssue(
                        path="logging.components",
                        message="components must be a dictionary",
                        severity="error",
                    )
                )
            else:
                for name, enabled in components.items():
                    if not isinstance(enabled, bool):
                        errors.append(
                            ValidationIssue(
                                path=f"logging.components.{name}",
                                message=f"component switch must be a boolean: {name}",
                                severity="error",
                            )
                        )

        options = logging_data.get("options")
        if options is not None:
            if not isinstance(options, dict):
                errors.append(
                    ValidationIssue(
                        path="logging.options",
                        message="options must be a dictionary",
                        severity="error",
                    )
                )
            else:
                if "show_context" in options and not isinstance(options["show_context"], bool):
                    errors.append(
                        ValidationIssue(
                            path="logging.options.show_context",
                            message="show_context must be a boolean",
                            severity="error",
                        )
                    )
                truncate_at = options.get("truncate_at")
                if truncate_at is not None and (
                    isinstance(truncate_at, bool)
                    or not isinstance(truncate_at, int)
                    or truncate_at < 1
                ):
                    errors.append(
                        ValidationIssue(
                            path="logging.options.truncate_at",
                            message="truncate_at must be a positive integer",
                            severity="error",
                        )
                    )

        return errors

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)

        local_path = Path(LOCAL_CONFIG_NAME)
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".sysflow" / "config.yaml"
        if home_path.exists():
            return home_path

        # Not found - use local path as default
        return local_path

    def _dict_to_config(self, data: dict[str, Any]) -> CatalogConfig:
        kwargs: dict[str, Any] = {}

        for field in fields(CatalogConfig):
            if field.name in data:
                kwargs[field.name] = self._convert_field(field.type, data[field.name])

        return CatalogConfig(**kwargs)

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert field value to appropriate type.

        Args:
            field_type: Expected field type
            value: Value to convert

        Returns:
            Converted value
        """
        if value is None:
            return None

        origin = typing.get_origin(field_type)

        if origin is list:
            if not isinstance(value, list):
                return value
            args = typing.get_args(field_type)
            if args:
                return [self._convert_field(args[0], item) for item in value]
            return value

        if hasattr(field_type, "__dataclass_fields__"):
            if isinstance(value, dict):
                kwargs = {}
                for f in fields(field_type):
                    if f.name in value:
                        kwargs[f.name] = self._convert_field(f.type, value[f.name])
                return field_type(**kwargs)
            return value

        if hasattr(field_type, "__mro__") and any(
            base.__name__ == "Enum" for base in field_type.__mro__
        ):
            if isinstance(value, str):
                return field_type(value)
            return value

        return value

