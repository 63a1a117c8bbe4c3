"""
Pytest configuration and fixtures for in-files cache tests.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from infiles.cache.file_cache import InFilesCache
from infiles.config import Settings, clear_settings_cache


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test outputs."""
    return tmp_path


@pytest.fixture
def project_root(temp_dir: Path) -> Path:
    """Provide a project directory marked by a package.json file."""
    root = temp_dir / "project"
    root.mkdir()
    (root / "package.json").write_text('{"name": "fixture"}')
    return root.resolve()


@pytest.fixture
def cache(project_root: Path) -> InFilesCache:
    """Provide a cache whose project root is known up front."""
    return InFilesCache(".cache", project_root=project_root)


@pytest.fixture
def write_source(project_root: Path):
    """Write a real source file under the project root."""

    def _write(relative_path: str, content: str) -> Path:
        path = project_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mock_env_vars(temp_dir: Path) -> Generator[dict[str, str], None, None]:
    """Provide mock environment variables for testing."""
    env_vars = {
        "INFILES_CACHE_DIR": str(temp_dir / "env-cache"),
        "INFILES_ROOT_MARKER": "pyproject.toml",
        "INFILES_LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, env_vars, clear=False):
        clear_settings_cache()
        yield env_vars


@pytest.fixture
def mock_settings(mock_env_vars: dict[str, str]) -> Generator[Settings, None, None]:
    """Provide a Settings instance with mock configuration."""
    from infiles.config import get_settings

    yield get_settings()
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Automatically reset settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
