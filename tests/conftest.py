"""Shared test fixtures."""

from pathlib import Path

import pytest


def _find_config() -> Path | None:
    """Find the sample ekushey.toml from the project root."""
    for base in [Path("."), Path("..")]:
        p = base / "ekushey.toml"
        if p.exists():
            return p.resolve()
    return None


@pytest.fixture
def sample_config() -> Path:
    """Path to the shipped ekushey.toml; skips the test if it is not found."""
    config_path = _find_config()
    if config_path is None:
        pytest.skip("ekushey.toml not found")
    return config_path


@pytest.fixture
def write_config(tmp_path):
    """Write a TOML config into tmp_path and return its path."""

    def _write(body: str, name: str = "ekushey.toml") -> Path:
        path = tmp_path / name
        path.write_text(body, encoding="utf-8")
        return path

    return _write
