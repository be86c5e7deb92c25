"""Platform-specific utilities for cross-platform compatibility."""

import os
import platform
import subprocess
from typing import List, Optional

from .logger import get_logger

logger = get_logger(__name__)


def get_platform() -> str:
    system = platform.system()
    if system == "Darwin":
        return "macos"
    return system.lower()


def get_subprocess_kwargs(**kwargs) -> dict:
    """Extra subprocess.run arguments that keep console windows hidden on Windows."""
    if get_platform() == "windows":
        kwargs.setdefault("creationflags", getattr(subprocess, "CREATE_NO_WINDOW", 0))
    return kwargs


def get_clipboard_command() -> Optional[List[str]]:
    system = get_platform()

    if system == "macos":
        return ["pbcopy"]
    if system == "windows":
        return ["clip"]
    if system == "linux":
        if os.environ.get("WAYLAND_DISPLAY"):
            return ["wl-copy"]
        return ["xclip", "-selection", "clipboard"]

    return None


def check_accessibility_permissions() -> bool:

    if get_platform() != "macos":
        return True

    try:
        # Attempt a minimal System Events interaction to test accessibility
        result = subprocess.run(
            ["osascript", "-e", 'tell application "System Events" to keystroke ""'],
            capture_output=True,
            timeout=5,
        )
        return result.returncode == 0
    except subprocess.TimeoutExpired:
        logger.warning("Accessibility permission check timed out")
        return False
    except Exception as e:
        logger.warning(f"Failed to check accessibility permissions: {e}")
        return False


def request_accessibility_permissions() -> None:

    if get_platform() != "macos":
        return

    subprocess.run(
        [
            "open",
            "x-apple.systempreferences:com.apple.preference.security?Privacy_Accessibility",
        ],
        check=False,
    )


def check_and_request_permissions() -> bool:
    """
    Make sure the app may send keystrokes; prompt the user on macOS if not.

    Pasting and the global hotkey both need the accessibility permission.
    Returns whether it is granted after the prompt.
    """
    if check_accessibility_permissions():
        return True

    from ..ui.permissions_dialog import PermissionsDialog

    logger.info("Showing accessibility permissions dialog")
    dialog = PermissionsDialog()
    dialog.exec()

    granted = check_accessibility_permissions()
    if granted:
        logger.info("User granted accessibility permissions")
    else:
        logger.warning("User continued without accessibility permissions")

    return granted
