"""Application runtime."""

import signal
import sys
from typing import Optional

from PySide6.QtCore import QObject
from PySide6.QtWidgets import QApplication

from aquavoice import __app_name__, __version__
from aquavoice.core.audio import AudioRecorder
from aquavoice.core.errors import BindingError
from aquavoice.core.input import HotkeyRegistrar
from aquavoice.core.output import PasteDispatcher
from aquavoice.core.pipeline import (
    DictationPipeline,
    PipelineState,
    StatusReporter,
    StatusSnapshot,
)
from aquavoice.core.settings import Settings, get_settings
from aquavoice.core.settings.config import ERROR_RESET_MS
from aquavoice.core.transcription import TranscriptionClient
from aquavoice.ui.settings_window import SettingsWindow
from aquavoice.ui.tray import SystemTray
from aquavoice.utils.logger import get_logger, shutdown_logging
from aquavoice.utils.platform import check_and_request_permissions

logger = get_logger(__name__)

NOTICE_RESET_MS = 2000


class AquaVoiceApp(QObject):

    def __init__(self):
        super().__init__()

        self._settings = get_settings()
        self._settings_window: Optional[SettingsWindow] = None

        self._reporter = StatusReporter(self)
        self._tray = SystemTray()
        self._recorder = AudioRecorder(device=self._settings.input_device)
        self._hotkey_registrar = HotkeyRegistrar(self)
        self._pipeline = DictationPipeline(
            recorder=self._recorder,
            client=TranscriptionClient(model=self._settings.model),
            dispatcher=PasteDispatcher(),
            reporter=self._reporter,
            api_key_provider=lambda: self._settings.api_key,
            parent=self,
        )

        self._reporter.status_changed.connect(self._on_status_changed)
        self._tray.settings_requested.connect(self._show_settings)
        self._tray.quit_requested.connect(self._quit)
        self._hotkey_registrar.pressed.connect(self._pipeline.start_recording)
        self._hotkey_registrar.released.connect(self._pipeline.stop_and_transcribe)

        check_and_request_permissions()

    @property
    def reporter(self) -> StatusReporter:
        return self._reporter

    @property
    def pipeline(self) -> DictationPipeline:
        return self._pipeline

    def _on_status_changed(self, status: StatusSnapshot) -> None:
        self._tray.show_status(status)
        if self._settings_window is not None:
            self._settings_window.show_status(status)

    def _notify(self, state: PipelineState, message: str, reset_after_ms: int) -> None:
        """Show a settings-related message unless a dictation is in progress."""
        if self._reporter.state.is_busy:
            logger.info(f"Not showing '{message}' during {self._reporter.state.value}")
            return
        self._reporter.set_status(state, message, reset_after_ms=reset_after_ms)

    def register_shortcut(self, shortcut: str) -> bool:
        try:
            self._hotkey_registrar.register(shortcut)
        except BindingError as e:
            logger.error(f"Failed to register shortcut: {e}")
            self._notify(PipelineState.ERROR, f"Shortcut error: {e}", ERROR_RESET_MS)
            return False

        self._notify(PipelineState.SUCCESS, "Shortcut registered!", NOTICE_RESET_MS)
        return True

    def _show_settings(self) -> None:
        if self._settings_window is None:
            self._settings_window = SettingsWindow(self._settings)
            self._settings_window.settings_saved.connect(self._on_settings_saved)
            self._settings_window.save_failed.connect(self._on_settings_save_failed)
            self._settings_window.show_status(self._reporter.status)

        self._settings_window.show()
        self._settings_window.raise_()
        self._settings_window.activateWindow()

    def _on_settings_saved(self, settings: Settings) -> None:
        old_settings = self._settings
        self._settings = settings

        self._recorder.device = settings.input_device
        if settings.model != old_settings.model:
            logger.info(f"Model changed: {old_settings.model} -> {settings.model}")
            self._pipeline.client = TranscriptionClient(model=settings.model)

        shortcut_ok = True
        if settings.shortcut:
            shortcut_ok = self.register_shortcut(settings.shortcut)
        else:
            logger.info("Shortcut cleared, unregistering")
            self._hotkey_registrar.unregister()

        if shortcut_ok:
            self._notify(PipelineState.SUCCESS, "Settings saved!", NOTICE_RESET_MS)

    def _on_settings_save_failed(self, message: str) -> None:
        self._notify(PipelineState.ERROR, message, NOTICE_RESET_MS)

    def _quit(self) -> None:
        logger.info("Shutting down application")
        self._hotkey_registrar.unregister()
        self._pipeline.shutdown()
        self._tray.hide()
        QApplication.quit()
        logger.info("Application shutdown complete")
        shutdown_logging()

    def run(self) -> None:
        logger.info(f"Starting {__app_name__} v{__version__}")
        logger.info(
            f"Settings: model={self._settings.model}, "
            f"api_key={self._settings.masked_api_key()}, "
            f"shortcut={self._settings.shortcut or '<unset>'}"
        )

        if self._settings.shortcut:
            self.register_shortcut(self._settings.shortcut)

        if not self._settings.api_key:
            logger.info("No API key configured, opening settings")
            self._show_settings()

        logger.info("Application initialization complete")


def main():
    app = QApplication(sys.argv)
    app.setApplicationName(__app_name__)
    app.setQuitOnLastWindowClosed(False)
    signal.signal(signal.SIGINT, lambda *args: QApplication.quit())

    aquavoice_app = AquaVoiceApp()
    aquavoice_app.run()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
