"""Root pytest configuration."""
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from src.cascade_config.config.settings import LoaderSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that read real files from a config directory"
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's shell environment out of the tests."""
    for var_name in ("NODE_ENV", "NODE_CONFIG_ENV", "CASCADE_CONFIG_CONFIG_DIR", "CASCADE_CONFIG_EXTENSIONS"):
        monkeypatch.delenv(var_name, raising=False)


@pytest.fixture
def config_dir(tmp_path) -> Path:
    """Empty config directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


@pytest.fixture
def write_config(config_dir) -> Callable[[str, Any], Path]:
    """Write a config file; dicts are dumped as JSON, strings written verbatim."""
    def _write(file_name: str, content: Any) -> Path:
        path = config_dir / file_name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(config_dir) -> LoaderSettings:
    """Loader settings pointing at the temporary config directory."""
    return LoaderSettings(config_dir=str(config_dir))
