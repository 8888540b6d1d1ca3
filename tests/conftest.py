"""
Pytest configuration and shared fixtures for sysflow-core tests.
"""

import io
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sysflow_core.logging import CatalogLogger, LogConfig  # noqa: E402
from sysflow_core.types import LogFormat, LogLevel  # noqa: E402
from sysflow_core.workflow import (  # noqa: E402
    BlockGroupDefinition,
    EdgeDefinition,
    StepDefinition,
    WorkflowDefinition,
)

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def configs_dir(fixtures_dir: Path) -> Path:
    """Return the config fixtures directory."""
    return fixtures_dir / "configs"


@pytest.fixture(scope="session")
def workflows_dir(fixtures_dir: Path) -> Path:
    """Return the workflow fixtures directory."""
    return fixtures_dir / "workflows"


# =============================================================================
# Logger Fixtures
# =============================================================================


@pytest.fixture
def log_stream() -> io.StringIO:
    """In-memory stream receiving log output."""
    return io.StringIO()


@pytest.fixture
def json_logger(log_stream: io.StringIO) -> CatalogLogger:
    """Debug-level JSON logger writing to ``log_stream``."""
    return CatalogLogger(
        LogConfig(level=LogLevel.DEBUG, format=LogFormat.JSON, output=log_stream)
    )


# =============================================================================
# Definition Fixtures
# =============================================================================


@pytest.fixture
def make_workflow() -> Callable[..., WorkflowDefinition]:
    """Factory for small workflow definitions.

    Defaults to a valid single-start-step workflow; any field can be
    overridden with keyword arguments.
    """

    def _make(**overrides: Any) -> WorkflowDefinition:
        fields: dict[str, Any] = {
            "id": "00000000-0000-0000-0000-000000000001",
            "system_slug": "test-workflow",
            "name": "Test Workflow",
            "description": "Workflow used in tests",
            "version": 1,
            "is_system": True,
            "steps": (StepDefinition(temp_id="step_1", name="Start", type="start"),),
        }
        fields.update(overrides)
        return WorkflowDefinition(**fields)

    return _make


@pytest.fixture
def grouped_workflow(make_workflow: Callable[..., WorkflowDefinition]) -> WorkflowDefinition:
    """Start step wired to a function step that lives in block group g1."""
    return make_workflow(
        steps=[
            StepDefinition(temp_id="step_1", name="Start", type="start"),
            StepDefinition(
                temp_id="step_2",
                name="Work",
                type="function",
                block_group_temp_id="g1",
            ),
        ],
        block_groups=[BlockGroupDefinition(temp_id="g1", name="Group", type="parallel")],
        edges=[EdgeDefinition(source_temp_id="step_1", target_temp_id="step_2")],
    )


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "registry: Registry tests")
    config.addinivalue_line("markers", "builtin: Built-in catalog tests")
