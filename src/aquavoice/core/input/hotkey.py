"""
Global push-to-talk hotkey registration.

Uses pynput for the OS-level keyboard hook.
"""

import threading
from typing import Callable, FrozenSet, Optional, Set, Union

from PySide6.QtCore import QObject, Signal

from ...utils.logger import get_logger
from ...utils.platform import get_platform
from ..errors import BindingError
from .descriptor import (
    ALT,
    COMMAND_OR_CONTROL,
    SHIFT,
    HotkeyDescriptor,
    coerce_descriptor,
)

logger = get_logger(__name__)


class HotkeyRegistrar(QObject):
    """
    Binds one global key combination at a time.

    Signals:
        pressed: Emitted when the combination becomes held
        released: Emitted when the combination stops being held
    """

    pressed = Signal()
    released = Signal()

    def __init__(
        self,
        parent: Optional[QObject] = None,
        binding_factory: Optional[Callable[..., "_PynputHotkeyBinding"]] = None,
    ):
        super().__init__(parent)

        self._binding_factory = binding_factory or _PynputHotkeyBinding
        self._binding: Optional[_PynputHotkeyBinding] = None
        self._descriptor: Optional[HotkeyDescriptor] = None
        self._is_hotkey_active = False
        self._lock = threading.Lock()

    @property
    def active_descriptor(self) -> Optional[HotkeyDescriptor]:
        return self._descriptor

    @property
    def is_registered(self) -> bool:
        return self._binding is not None

    def register(self, descriptor: Union[str, HotkeyDescriptor]) -> HotkeyDescriptor:
        """
        Bind ``descriptor``, replacing any previous binding.

        The old binding is always dropped first, even if stopping it fails.
        Raises BindingError if the new combination cannot be parsed or
        bound; in that case no binding is left active.
        """
        with self._lock:
            self._release_current()
            new_descriptor = coerce_descriptor(descriptor)

            binding = self._binding_factory(
                new_descriptor, self._on_hotkey_pressed, self._on_hotkey_released
            )
            try:
                binding.start()
            except BindingError:
                raise
            except Exception as e:
                raise BindingError(
                    f"Could not register {new_descriptor}: {e}"
                ) from e

            self._binding = binding
            self._descriptor = new_descriptor

        logger.info(f"Registered shortcut: {new_descriptor}")
        return new_descriptor

    def unregister(self) -> None:
        with self._lock:
            self._release_current()

    def _release_current(self) -> None:
        old_binding = self._binding
        self._binding = None
        self._descriptor = None

        if self._is_hotkey_active:
            # A held combo that gets unbound would otherwise never release
            self._is_hotkey_active = False
            self.released.emit()

        if old_binding is None:
            return

        try:
            old_binding.stop()
        except Exception as e:
            logger.debug(f"Ignoring error while unregistering old shortcut: {e}")

    def _on_hotkey_pressed(self, binding) -> None:
        if binding is not self._binding:
            return
        if not self._is_hotkey_active:
            self._is_hotkey_active = True
            self.pressed.emit()

    def _on_hotkey_released(self, binding) -> None:
        if binding is not self._binding:
            return
        if self._is_hotkey_active:
            self._is_hotkey_active = False
            self.released.emit()


def _pynput_trigger_key(token: str):
    from pynput import keyboard

    named = {
        "SPACE": keyboard.Key.space,
        "UP": keyboard.Key.up,
        "DOWN": keyboard.Key.down,
        "LEFT": keyboard.Key.left,
        "RIGHT": keyboard.Key.right,
        "ENTER": keyboard.Key.enter,
        "ESCAPE": keyboard.Key.esc,
        "TAB": keyboard.Key.tab,
        "BACKSPACE": keyboard.Key.backspace,
        "DELETE": keyboard.Key.delete,
        "HOME": keyboard.Key.home,
        "END": keyboard.Key.end,
        "PAGEUP": keyboard.Key.page_up,
        "PAGEDOWN": keyboard.Key.page_down,
    }
    if token in named:
        return named[token]
    return token.lower()


# macOS kVK_ANSI_* codes; they follow the physical US layout, not ASCII
_MACOS_VIRTUAL_KEYS = {
    "A": 0x00, "S": 0x01, "D": 0x02, "F": 0x03, "H": 0x04, "G": 0x05,
    "Z": 0x06, "X": 0x07, "C": 0x08, "V": 0x09, "B": 0x0B, "Q": 0x0C,
    "W": 0x0D, "E": 0x0E, "R": 0x0F, "Y": 0x10, "T": 0x11, "1": 0x12,
    "2": 0x13, "3": 0x14, "4": 0x15, "6": 0x16, "5": 0x17, "9": 0x19,
    "7": 0x1A, "8": 0x1C, "0": 0x1D, "O": 0x1F, "U": 0x20, "I": 0x22,
    "P": 0x23, "L": 0x25, "J": 0x26, "K": 0x28, "N": 0x2D, "M": 0x2E,
}

# X11 reports the shifted keysym, so Shift+1 arrives as "!"
_X11_SHIFTED_DIGITS = {
    "1": "!", "2": "@", "3": "#", "4": "$", "5": "%",
    "6": "^", "7": "&", "8": "*", "9": "(", "0": ")",
}


def _pynput_trigger_vks(token: str, platform: str) -> FrozenSet[int]:
    """
    Virtual key codes pynput may report for a letter or digit token.

    Matching on ``vk`` keeps the physical key stable while modifiers change
    the reported character (``Shift+1`` gives ``!``, ``Option+A`` gives
    ``å``, ``Ctrl+A`` on Windows gives ``\\x01``).
    """
    if len(token) != 1:
        return frozenset()

    if platform == "macos":
        vk = _MACOS_VIRTUAL_KEYS.get(token)
        return frozenset() if vk is None else frozenset({vk})
    if platform == "windows":
        # VK_A..VK_Z and VK_0..VK_9 equal the uppercase ASCII codes
        return frozenset({ord(token)})

    # X11: vk is the keysym, which is Latin-1 for these keys
    vks = {ord(token.lower()), ord(token.upper())}
    if token in _X11_SHIFTED_DIGITS:
        vks.add(ord(_X11_SHIFTED_DIGITS[token]))
    return frozenset(vks)


class _PynputHotkeyBinding:
    """
    One pynput listener watching for one key combination.
    """

    def __init__(self, descriptor: HotkeyDescriptor, on_pressed, on_released):
        self._descriptor = descriptor
        self._on_pressed = on_pressed
        self._on_released = on_released
        self._keyboard_listener = None
        self._pressed_keys: set = set()
        self._trigger_down = False

        self._trigger_key = _pynput_trigger_key(descriptor.key)
        self._trigger_vks = _pynput_trigger_vks(descriptor.key, get_platform())
        self._required_modifier_types: Set[str] = set(descriptor.modifiers)

    def _is_trigger(self, key) -> bool:
        from pynput import keyboard

        if not isinstance(key, keyboard.KeyCode):
            return key == self._trigger_key

        if key.vk is not None and self._trigger_vks:
            return key.vk in self._trigger_vks
        if key.char is not None:
            return key.char.lower() == self._trigger_key
        return False

    def _is_modifier_pressed(self, mod_type: str) -> bool:
        from pynput import keyboard

        if mod_type == COMMAND_OR_CONTROL:
            if get_platform() == "macos":
                variants = (keyboard.Key.cmd, keyboard.Key.cmd_l, keyboard.Key.cmd_r)
            else:
                variants = (
                    keyboard.Key.ctrl,
                    keyboard.Key.ctrl_l,
                    keyboard.Key.ctrl_r,
                )
        elif mod_type == ALT:
            variants = (
                keyboard.Key.alt,
                keyboard.Key.alt_l,
                keyboard.Key.alt_r,
                keyboard.Key.alt_gr,
            )
        elif mod_type == SHIFT:
            variants = (keyboard.Key.shift, keyboard.Key.shift_l, keyboard.Key.shift_r)
        else:
            return False

        return any(v in self._pressed_keys for v in variants)

    def _check_hotkey(self) -> bool:
        if not self._trigger_down:
            return False

        return all(
            self._is_modifier_pressed(mod_type)
            for mod_type in self._required_modifier_types
        )

    def _on_press(self, key) -> None:
        if self._is_trigger(key):
            self._trigger_down = True
        else:
            self._pressed_keys.add(key)

        if self._check_hotkey():
            self._on_pressed(self)

    def _on_release(self, key) -> None:
        if self._is_trigger(key):
            self._trigger_down = False
        else:
            self._pressed_keys.discard(key)

        if not self._check_hotkey():
            self._on_released(self)

    def start(self) -> None:
        from pynput import keyboard

        self._keyboard_listener = keyboard.Listener(
            on_press=self._on_press, on_release=self._on_release
        )
        self._keyboard_listener.start()

        if hasattr(self._keyboard_listener, "IS_TRUSTED"):
            logger.info(
                f"Keyboard listener IS_TRUSTED: {self._keyboard_listener.IS_TRUSTED}"
            )
            if not self._keyboard_listener.IS_TRUSTED:
                logger.warning(
                    "Hotkey listener is NOT TRUSTED. Accessibility permissions not granted."
                )

    def stop(self) -> None:
        if self._keyboard_listener:
            self._keyboard_listener.stop()
            self._keyboard_listener = None
