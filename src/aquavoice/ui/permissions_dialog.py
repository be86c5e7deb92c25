"""macOS prompt for the accessibility permission needed to paste."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from .. import __app_name__
from ..utils.logger import get_logger
from ..utils.platform import (
    check_accessibility_permissions,
    request_accessibility_permissions,
)

logger = get_logger(__name__)

_GRANTED_STYLE = "color: #2e7d32; font-weight: bold;"
_MISSING_STYLE = "color: #b26a00; font-weight: bold;"


class PermissionsDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Accessibility Permission Required")
        self.setMinimumWidth(420)
        self.setModal(True)

        self._setup_ui()
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(12)

        explanation = QLabel(
            f"<b>{__app_name__}</b> pastes the transcribed text by sending a "
            "paste keystroke to the focused application, and watches for "
            "your dictation shortcut while other apps are in front.<br><br>"
            "macOS only allows this once the app is enabled under "
            "<i>System Settings → Privacy &amp; Security → Accessibility</i>. "
            "The microphone permission is requested separately the first "
            "time you record."
        )
        explanation.setTextFormat(Qt.RichText)
        explanation.setWordWrap(True)
        layout.addWidget(explanation)

        self._status_label = QLabel()
        layout.addWidget(self._status_label)

        buttons = QDialogButtonBox()
        self._open_settings_btn = QPushButton("Open Accessibility Settings")
        self._open_settings_btn.clicked.connect(self._open_settings)
        buttons.addButton(self._open_settings_btn, QDialogButtonBox.ActionRole)

        self._recheck_btn = QPushButton("Check Again")
        self._recheck_btn.clicked.connect(self.refresh)
        buttons.addButton(self._recheck_btn, QDialogButtonBox.ActionRole)

        self._continue_btn = buttons.addButton(
            "Continue Anyway", QDialogButtonBox.AcceptRole
        )
        buttons.accepted.connect(self.accept)
        layout.addWidget(buttons)

    def refresh(self) -> bool:
        granted = check_accessibility_permissions()

        if granted:
            self._status_label.setText("✅ Permission granted")
            self._status_label.setStyleSheet(_GRANTED_STYLE)
            self._continue_btn.setText("Done")
        else:
            self._status_label.setText("⚠️ Permission not granted yet")
            self._status_label.setStyleSheet(_MISSING_STYLE)
            self._continue_btn.setText("Continue Anyway")

        self._open_settings_btn.setEnabled(not granted)
        self._recheck_btn.setEnabled(not granted)
        return granted

    def _open_settings(self) -> None:
        logger.info("Opening System Settings for accessibility permissions")
        request_accessibility_permissions()
