"""
Settings window.

API key, dictation shortcut (captured from a live key press), model and
microphone, plus a status line that mirrors the pipeline state.
"""

from typing import Optional

from PySide6.QtCore import QEvent, QObject, Signal
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .. import __app_name__
from ..core.audio.recorder import AudioRecorder
from ..core.input.descriptor import descriptor_from_key_event
from ..core.pipeline.status import PipelineState, StatusSnapshot
from ..core.settings import Settings, get_settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

SYSTEM_DEFAULT_DEVICE = "System default"

STATUS_STYLES = {
    PipelineState.IDLE: "color: #666;",
    PipelineState.RECORDING: "color: #d32f2f; font-weight: bold;",
    PipelineState.PROCESSING: "color: #1976d2; font-weight: bold;",
    PipelineState.TRANSCRIBING: "color: #1976d2; font-weight: bold;",
    PipelineState.SUCCESS: "color: #2e7d32; font-weight: bold;",
    PipelineState.ERROR: "color: #d32f2f; font-weight: bold;",
}


class SettingsWindow(QDialog):
    """
    Settings dialog.

    Signals:
        settings_saved: Emitted with the new Settings after they were written
        save_failed: Emitted with an error message when writing failed
    """

    settings_saved = Signal(object)
    save_failed = Signal(str)

    def __init__(
        self, settings: Optional[Settings] = None, parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self.setWindowTitle(f"{__app_name__} Settings")
        self.setMinimumWidth(420)

        self._settings = settings or get_settings()
        self._pending_shortcut = self._settings.shortcut
        self._capturing = False

        self._setup_ui()
        self._load_settings()

    @property
    def is_capturing(self) -> bool:
        return self._capturing

    @property
    def pending_shortcut(self) -> str:
        return self._pending_shortcut

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        api_group = QGroupBox("Gemini")
        api_layout = QFormLayout(api_group)

        self._api_key_edit = QLineEdit()
        self._api_key_edit.setEchoMode(QLineEdit.Password)
        self._api_key_edit.setPlaceholderText("Paste your Gemini API key")
        api_layout.addRow("API key:", self._api_key_edit)

        self._model_edit = QLineEdit()
        api_layout.addRow("Model:", self._model_edit)
        layout.addWidget(api_group)

        shortcut_group = QGroupBox("Dictation Shortcut")
        shortcut_layout = QHBoxLayout(shortcut_group)

        self._shortcut_label = QLabel()
        shortcut_layout.addWidget(self._shortcut_label, 1)

        self._set_shortcut_btn = QPushButton("Set Shortcut")
        self._set_shortcut_btn.clicked.connect(self.begin_shortcut_capture)
        shortcut_layout.addWidget(self._set_shortcut_btn)
        layout.addWidget(shortcut_group)

        audio_group = QGroupBox("Microphone")
        audio_layout = QFormLayout(audio_group)
        self._device_combo = QComboBox()
        audio_layout.addRow("Input device:", self._device_combo)
        layout.addWidget(audio_group)

        bottom = QHBoxLayout()
        self._status_label = QLabel()
        bottom.addWidget(self._status_label, 1)

        self._save_btn = QPushButton("Save")
        self._save_btn.setDefault(True)
        self._save_btn.clicked.connect(self.save)
        bottom.addWidget(self._save_btn)
        layout.addLayout(bottom)

        self.show_status(StatusSnapshot(PipelineState.IDLE))

    def _load_settings(self) -> None:
        self._api_key_edit.setText(self._settings.api_key)
        self._model_edit.setText(self._settings.model)
        self._shortcut_label.setText(self._pending_shortcut or "Not set")
        self._populate_devices()

    def _populate_devices(self) -> None:
        self._device_combo.clear()
        self._device_combo.addItem(SYSTEM_DEFAULT_DEVICE, None)

        try:
            devices = AudioRecorder.list_devices()
        except Exception as e:
            logger.warning(f"Could not list audio devices: {e}")
            devices = []

        for device in devices:
            self._device_combo.addItem(device.name, device.name)

        if self._settings.input_device:
            index = self._device_combo.findData(self._settings.input_device)
            if index < 0:
                self._device_combo.addItem(
                    self._settings.input_device, self._settings.input_device
                )
                index = self._device_combo.count() - 1
            self._device_combo.setCurrentIndex(index)

    def begin_shortcut_capture(self) -> None:
        """Listen for the next key combination; stops after one non-modifier key."""
        if self._capturing:
            return

        self._capturing = True
        self._shortcut_label.setText("Press keys...")
        QApplication.instance().installEventFilter(self)

    def _end_shortcut_capture(self) -> None:
        self._capturing = False
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if not self._capturing or event.type() != QEvent.KeyPress:
            return super().eventFilter(watched, event)

        descriptor = descriptor_from_key_event(event.key(), event.modifiers())
        if descriptor is not None:
            self._pending_shortcut = descriptor.to_string()
            self._shortcut_label.setText(self._pending_shortcut)
            logger.debug(f"Captured shortcut: {self._pending_shortcut}")
            self._end_shortcut_capture()

        # Swallow every key while capturing so it does not type into a field
        return True

    def collect_settings(self) -> Settings:
        return Settings(
            api_key=self._api_key_edit.text().strip(),
            shortcut=self._pending_shortcut,
            model=self._model_edit.text().strip() or self._settings.model,
            input_device=self._device_combo.currentData(),
        )

    def save(self) -> Optional[Settings]:
        if self._capturing:
            self._end_shortcut_capture()
            self._shortcut_label.setText(self._pending_shortcut or "Not set")

        new_settings = self.collect_settings()

        try:
            new_settings.save()
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            self.save_failed.emit(f"Save failed: {e}")
            return None

        self._settings = new_settings
        logger.info("Settings saved")
        self.settings_saved.emit(new_settings)
        return new_settings

    def show_status(self, status: StatusSnapshot) -> None:
        self._status_label.setText(status.display_text())
        self._status_label.setStyleSheet(STATUS_STYLES.get(status.state, ""))

    def closeEvent(self, event) -> None:
        if self._capturing:
            self._end_shortcut_capture()
            self._shortcut_label.setText(self._pending_shortcut or "Not set")
        super().closeEvent(event)
