"""Shared pytest fixtures for chatlink tests."""

import sys
from pathlib import Path

import pytest

# Add the package to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def config_home(monkeypatch, tmp_path):
    """Point the config file lookup at an empty temporary XDG config home."""
    monkeypatch.delenv("CHATLINK_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path
