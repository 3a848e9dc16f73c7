"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config file location at an empty directory."""
    config_dir = tmp_path / "isolated-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.setenv("APPDATA", str(config_dir))
    monkeypatch.delenv("TODOSPAN_FILE", raising=False)
    return config_dir
