"""Shared fixtures: offscreen QApplication and isolated settings."""
from __future__ import annotations

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure project root is on sys.path so imports work
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import settings  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Provide a single QApplication for the entire test session."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Use default settings stored in a temporary directory."""
    manager = settings.SettingsManager(config_dir=tmp_path / "config")
    monkeypatch.setattr(settings, "_settings_manager", manager)
    return manager
