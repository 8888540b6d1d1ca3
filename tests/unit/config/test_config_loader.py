"""Unit tests for ConfigLoader."""

import pytest

from sysflow_core.config import (
    CONFIG_PATH_ENV,
    CatalogConfig,
    ConfigLoader,
    resolve_env_vars,
)
from sysflow_core.errors import CatalogError
from sysflow_core.types import LogFormat, LogLevel


class TestResolveEnvVars:
    """Tests for ${VAR} resolution."""

    def test_plain_reference(self, monkeypatch):
        monkeypatch.setenv("SYSFLOW_TEST_DIR", "/opt/workflows")
        assert resolve_env_vars("${SYSFLOW_TEST_DIR}/extra") == "/opt/workflows/extra"

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv("SYSFLOW_UNSET", raising=False)
        assert resolve_env_vars("${SYSFLOW_UNSET:-INFO}") == "INFO"

    def test_required_missing(self, monkeypatch):
        monkeypatch.delenv("SYSFLOW_UNSET", raising=False)
        with pytest.raises(CatalogError) as exc_info:
            resolve_env_vars("${SYSFLOW_UNSET}")
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_required_with_message(self, monkeypatch):
        monkeypatch.delenv("SYSFLOW_UNSET", raising=False)
        with pytest.raises(CatalogError) as exc_info:
            resolve_env_vars("${SYSFLOW_UNSET:?set the workflow dir}")
        assert exc_info.value.detail == "set the workflow dir"

    def test_no_references(self):
        assert resolve_env_vars("plain") == "plain"


class TestConfigLoader:
    """Tests for ConfigLoader."""

    @pytest.fixture
    def loader(self):
        """Create ConfigLoader instance."""
        return ConfigLoader()

    def test_defaults(self, loader):
        config = loader.load_defaults()
        assert config == CatalogConfig()
        assert config.workflows.builtin is True
        assert config.workflows.directories == []

    def test_load_file(self, loader, configs_dir):
        path = configs_dir / "test-config.yaml"
        config = loader.load(path)

        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.JSON
        assert config.logging.components.config is False
        assert config.logging.components.registry is True
        assert config.logging.options.truncate_at == 120
        assert loader.config_path == path

    def test_missing_file_uses_defaults(self, loader, tmp_path):
        assert loader.load(tmp_path / "absent.yaml") == CatalogConfig()

    def test_missing_file_without_defaults(self, loader, tmp_path):
        with pytest.raises(CatalogError) as exc_info:
            loader.load(tmp_path / "absent.yaml", use_defaults=False)
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_env_path(self, loader, configs_dir, monkeypatch):
        monkeypatch.setenv(CONFIG_PATH_ENV, str(configs_dir / "test-config.yaml"))
        assert loader.load().logging.format == LogFormat.JSON

    def test_env_vars_in_file(self, loader, tmp_path, monkeypatch):
        monkeypatch.setenv("SYSFLOW_EXTRA", str(tmp_path))
        monkeypatch.delenv("SYSFLOW_LEVEL", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(
            "workflows:\n"
            "  directories: ['${SYSFLOW_EXTRA}/defs']\n"
            "logging:\n"
            "  level: ${SYSFLOW_LEVEL:-WARN}\n"
        )
        config = loader.load(path)
        assert config.workflows.directories == [f"{tmp_path}/defs"]
        assert config.logging.level == LogLevel.WARN

    def test_invalid_yaml(self, loader, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("workflows: [oops")
        with pytest.raises(CatalogError) as exc_info:
            loader.load(path)
        assert "Invalid YAML" in exc_info.value.detail

    def test_non_mapping_file(self, loader, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(CatalogError) as exc_info:
            loader.load(path)
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_to_log_config(self, loader, configs_dir):
        log_config = loader.load(configs_dir / "test-config.yaml").logging.to_log_config()
        assert log_config.level == LogLevel.DEBUG
        assert log_config.truncate_at == 120
        assert log_config.components["config"] is False


class TestConfigValidation:
    """Tests for ConfigLoader.validate."""

    @pytest.fixture
    def loader(self):
        return ConfigLoader()

    def test_unknown_key_is_warning(self, loader):
        result = loader.validate({"tools": {}})
        assert result.valid
        assert result.warnings[0].path == "tools"

    @pytest.mark.parametrize(
        ("data", "path"),
        [
            ({"workflows": []}, "workflows"),
            ({"workflows": {"builtin": "yes"}}, "workflows.builtin"),
            ({"workflows": {"directories": "defs"}}, "workflows.directories"),
            ({"workflows": {"directories": [1]}}, "workflows.directories"),
            ({"logging": "loud"}, "logging"),
            ({"logging": {"level": "TRACE"}}, "logging.level"),
            ({"logging": {"format": "xml"}}, "logging.format"),
            ({"logging": {"level": ["DEBUG"]}}, "logging.level"),
            ({"logging": {"components": "x"}}, "logging.components"),
            ({"logging": {"components": {"registry": "no"}}}, "logging.components.registry"),
            ({"logging": {"options": 5}}, "logging.options"),
            ({"logging": {"options": {"show_context": "yes"}}}, "logging.options.show_context"),
            ({"logging": {"options": {"truncate_at": 0}}}, "logging.options.truncate_at"),
            ({"logging": {"options": {"truncate_at": True}}}, "logging.options.truncate_at"),
        ],
    )
    def test_invalid_values(self, loader, data, path):
        result = loader.validate(data)
        assert not result.valid
        assert result.errors[0].path == path

    def test_load_from_invalid_dict(self, loader):
        with pytest.raises(CatalogError) as exc_info:
            loader.load_from_dict({"logging": {"level": "TRACE"}})
        assert "logging.level" in exc_info.value.detail

    def test_malformed_logging_section_is_config_error(self, loader, tmp_path):
        """A scalar components section is reported, not converted."""
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  components: x\n")
        with pytest.raises(CatalogError) as exc_info:
            loader.load(path)
        assert exc_info.value.code == "CONFIG_INVALID"
        assert "logging.components" in exc_info.value.detail
