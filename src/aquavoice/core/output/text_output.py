"""
Paste dispatcher for transcribed text.

Puts the text on the system clipboard, waits for the write to settle,
then sends the platform paste chord to whatever has input focus.
"""

import subprocess
import time
from typing import List, Optional

from ...utils.logger import get_logger
from ...utils.platform import (
    get_clipboard_command,
    get_platform,
    get_subprocess_kwargs,
)
from ..errors import AutomationError
from ..settings.config import PASTE_DELAY_SECONDS

logger = get_logger(__name__)


class PasteDispatcher:

    def __init__(
        self,
        keyboard=None,
        paste_modifier=None,
        delay_seconds: float = PASTE_DELAY_SECONDS,
        clipboard_command: Optional[List[str]] = None,
    ):
        if keyboard is None or paste_modifier is None:
            from pynput.keyboard import Controller as KeyboardController
            from pynput.keyboard import Key

            if keyboard is None:
                keyboard = KeyboardController()
            if paste_modifier is None:
                paste_modifier = Key.cmd if get_platform() == "macos" else Key.ctrl

        self._keyboard = keyboard
        self._paste_modifier = paste_modifier
        self._delay_seconds = delay_seconds
        self._clipboard_command = clipboard_command or get_clipboard_command()

    def deliver(self, text: str) -> None:
        """
        Paste ``text`` at the current focus.

        The clipboard write is best-effort. Raises AutomationError if the
        paste keystroke cannot be sent.
        """
        logger.debug(
            f"Pasting text via clipboard: '{text[:50]}{'...' if len(text) > 50 else ''}'"
        )

        if not self.set_clipboard(text):
            logger.warning("Clipboard write failed, pasting anyway")

        time.sleep(self._delay_seconds)

        try:
            with self._keyboard.pressed(self._paste_modifier):
                self._keyboard.tap("v")
        except Exception as e:
            raise AutomationError(f"Paste keystroke failed: {e}") from e

        logger.info("Paste keystroke sent")

    def set_clipboard(self, text: str) -> bool:
        if not self._clipboard_command:
            logger.error(f"No clipboard command for platform {get_platform()}")
            return False

        try:
            subprocess.run(
                self._clipboard_command,
                **get_subprocess_kwargs(input=text, text=True, timeout=1, check=True),
            )
            return True
        except (
            subprocess.TimeoutExpired,
            FileNotFoundError,
            subprocess.CalledProcessError,
        ) as e:
            logger.error(f"Failed to set clipboard: {e}")
            return False
