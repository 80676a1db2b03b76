"""Shared fixtures for finbuddy tests."""

from datetime import date
from pathlib import Path

import pytest

TODAY = date(2024, 3, 15)


@pytest.fixture
def today() -> date:
    """Fixed reference date for validation checks."""
    return TODAY


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory and the data directory into tmp_path.

    Returns:
        The data directory.
    """
    data_dir = tmp_path / "data"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("FINBUDDY_DATA_DIR", str(data_dir))
    return data_dir
