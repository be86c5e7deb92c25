"""
Pytest configuration for Qt-based tests.

Provides fixtures for proper Qt object cleanup between tests to prevent segfaults.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication


@pytest.fixture(autouse=True)
def cleanup_qt_objects(qtbot, request):
    """
    Auto-cleanup fixture that runs after each test so Qt objects are
    destroyed before the next test starts.
    """
    yield

    app = QApplication.instance()
    if app:
        app.processEvents()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the settings file at a temporary directory."""
    monkeypatch.setattr(
        "aquavoice.core.settings.settings.get_data_dir", lambda: tmp_path
    )
    return tmp_path
