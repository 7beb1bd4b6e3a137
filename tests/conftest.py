"""Shared fixtures: an offscreen QApplication and an isolated settings file."""
from __future__ import annotations

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import settings
from settings import SettingsManager


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session", autouse=True)
def isolated_settings(tmp_path_factory):
    """Point the settings singleton at a throwaway directory."""
    sm = SettingsManager(settings_dir=tmp_path_factory.mktemp("settings"))
    settings._settings_manager = sm
    yield sm


@pytest.fixture(scope="session")
def qapp():
    """Provide a single QApplication for the entire test session."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication(sys.argv)
    yield app
