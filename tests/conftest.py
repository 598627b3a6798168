"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from pmprofiler.adapters.mock import MockAdapter
from pmprofiler.core.models.project import EnvironmentSnapshot


@pytest.fixture
def yarn_project(tmp_path: Path) -> Path:
    """An empty yarn project directory (resolved, like the session's root)."""
    root = tmp_path.resolve() / "app"
    root.mkdir()
    (root / "package.json").write_text('{"name": "app", "version": "1.0.0"}\n')
    return root


@pytest.fixture
def mock_adapter() -> MockAdapter:
    """Mock shell adapter that reports yarn 3 by default."""
    mock = MockAdapter()
    mock.set_output("yarn --version", "3.6.4")
    return mock


@pytest.fixture
def no_env() -> EnvironmentSnapshot:
    """Environment with no proxy or CA settings."""
    return EnvironmentSnapshot()
