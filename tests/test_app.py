"""
Tests for AquaVoiceApp wiring: shortcut registration notices and settings
updates. OS hooks are replaced with mocks.
"""

from unittest.mock import MagicMock, patch

import pytest

from aquavoice.core.errors import BindingError
from aquavoice.core.pipeline import PipelineState
from aquavoice.core.settings import Settings


@pytest.fixture
def app(qtbot):
    with patch("aquavoice.app.get_settings", return_value=Settings(api_key="k")), \
            patch("aquavoice.app.check_and_request_permissions"), \
            patch("aquavoice.app.PasteDispatcher"), \
            patch("aquavoice.app.HotkeyRegistrar") as mock_registrar_class:
        from aquavoice.app import AquaVoiceApp

        mock_registrar_class.return_value = MagicMock()
        instance = AquaVoiceApp()

    yield instance
    instance._tray.hide()


class TestShortcutNotices:
    def test_registered_notice(self, app):
        assert app.register_shortcut("Alt+R") is True
        assert app.reporter.state is PipelineState.SUCCESS
        assert app.reporter.status.message == "Shortcut registered!"

    def test_binding_error_notice(self, app):
        app._hotkey_registrar.register.side_effect = BindingError("Unknown key: F13")

        assert app.register_shortcut("Ctrl+F13") is False
        assert app.reporter.state is PipelineState.ERROR
        assert "F13" in app.reporter.status.message

    def test_notice_suppressed_while_recording(self, app):
        app.reporter.set_status(PipelineState.RECORDING)

        app.register_shortcut("Alt+R")

        assert app.reporter.state is PipelineState.RECORDING


class TestSettingsSaved:
    def test_model_change_replaces_client(self, app):
        old_client = app.pipeline.client

        app._on_settings_saved(Settings(api_key="k", model="gemini-2.5-flash"))

        assert app.pipeline.client is not old_client
        assert app.pipeline.client.model == "gemini/gemini-2.5-flash"
        assert app.reporter.status.message == "Settings saved!"

    def test_device_and_shortcut_applied(self, app):
        app._on_settings_saved(Settings(api_key="k", shortcut="Alt+Q", input_device="USB Mic"))

        assert app.pipeline.recorder.device == "USB Mic"
        app._hotkey_registrar.register.assert_called_with("Alt+Q")

    def test_cleared_shortcut_unregisters(self, app):
        app._on_settings_saved(Settings(api_key="k", shortcut=""))

        app._hotkey_registrar.unregister.assert_called_once()
        app._hotkey_registrar.register.assert_not_called()
