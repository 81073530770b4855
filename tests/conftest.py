"""
Shared pytest fixtures and configuration for envregistry tests.

Provides fresh registries, sample configuration trees and source files, and
resets the process-wide logger and registry between tests.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# Put `src/` first so `import envregistry` uses workspace code.
_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT / "src"))

from envregistry.core.config import ConfigRegistry, reset_registry
from envregistry.core.utils.logger import reset_logging


@pytest.fixture(autouse=True)
def isolate_global_state():
    """Reset the shared logger and registry around every test."""
    reset_logging()
    reset_registry()
    yield
    reset_logging()
    reset_registry()


@pytest.fixture
def sample_tree() -> Dict[str, Any]:
    """Nested configuration covering scalars, nulls, lists and sub-trees."""
    return {
        "app": {"name": "billing", "debug": False},
        "db": {"host": "localhost", "port": 5432, "password": None},
        "servers": [{"host": "a.internal"}, {"host": "b.internal"}],
        "timeout": 2.5,
    }


@pytest.fixture
def registry() -> ConfigRegistry:
    """A registry with private env/server maps and a private process environment."""
    return ConfigRegistry(environ={})


@pytest.fixture
def json_source(tmp_path: Path, sample_tree: Dict[str, Any]) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(sample_tree), encoding="utf-8")
    return path


@pytest.fixture
def typer_test_client():
    """Typer test client for CLI testing."""
    from typer.testing import CliRunner
    return CliRunner()
