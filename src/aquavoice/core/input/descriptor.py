"""
Hotkey descriptor strings.

A descriptor is the canonical text form of a key combination, for example
``CommandOrControl+Shift+Space``: modifiers first in a fixed order, then one
uppercased key token.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..errors import BindingError

COMMAND_OR_CONTROL = "CommandOrControl"
ALT = "Alt"
SHIFT = "Shift"

MODIFIER_ORDER: Tuple[str, ...] = (COMMAND_OR_CONTROL, ALT, SHIFT)

MODIFIER_ALIASES = {
    "COMMANDORCONTROL": COMMAND_OR_CONTROL,
    "CMDORCTRL": COMMAND_OR_CONTROL,
    "CMD": COMMAND_OR_CONTROL,
    "COMMAND": COMMAND_OR_CONTROL,
    "CTRL": COMMAND_OR_CONTROL,
    "CONTROL": COMMAND_OR_CONTROL,
    "ALT": ALT,
    "OPTION": ALT,
    "SHIFT": SHIFT,
}

NAMED_KEYS = frozenset(
    {
        "SPACE",
        "UP",
        "DOWN",
        "LEFT",
        "RIGHT",
        "ENTER",
        "ESCAPE",
        "TAB",
        "BACKSPACE",
        "DELETE",
        "HOME",
        "END",
        "PAGEUP",
        "PAGEDOWN",
    }
)


def is_valid_key_token(token: str) -> bool:
    if token in NAMED_KEYS:
        return True
    return len(token) == 1 and token.isascii() and token.isalnum()


@dataclass(frozen=True)
class HotkeyDescriptor:
    modifiers: Tuple[str, ...]
    key: str

    def __post_init__(self):
        unknown = [m for m in self.modifiers if m not in MODIFIER_ORDER]
        if unknown:
            raise BindingError(f"Unknown modifier: {unknown[0]}")
        if not is_valid_key_token(self.key):
            raise BindingError(f"Unknown key: {self.key}")

        ordered = tuple(m for m in MODIFIER_ORDER if m in self.modifiers)
        object.__setattr__(self, "modifiers", ordered)

    @classmethod
    def parse(cls, text: str) -> "HotkeyDescriptor":
        """
        Parse a ``+``-joined descriptor string.

        Tokens are case-insensitive and modifier aliases such as ``Cmd`` or
        ``Option`` are accepted. Raises BindingError for unknown tokens, a
        missing key, or more than one key.
        """
        if not text or not text.strip():
            raise BindingError("Shortcut is empty")

        modifiers = []
        key: Optional[str] = None

        for part in text.split("+"):
            token = part.strip().upper()
            if not token:
                # "Shift++" style input would otherwise slip through
                raise BindingError(f"Malformed shortcut: {text!r}")

            if token in MODIFIER_ALIASES:
                modifier = MODIFIER_ALIASES[token]
                if modifier not in modifiers:
                    modifiers.append(modifier)
                continue

            if key is not None:
                raise BindingError(f"Shortcut has more than one key: {text!r}")
            if not is_valid_key_token(token):
                raise BindingError(f"Unknown key: {part.strip()}")
            key = token

        if key is None:
            raise BindingError("No key specified")

        return cls(modifiers=tuple(modifiers), key=key)

    def to_string(self) -> str:
        return "+".join(self.modifiers + (self.key,))

    def __str__(self) -> str:
        return self.to_string()


def coerce_descriptor(value: Union[str, HotkeyDescriptor]) -> HotkeyDescriptor:
    if isinstance(value, HotkeyDescriptor):
        return value
    return HotkeyDescriptor.parse(value)


def _qt_key_names() -> dict:
    from PySide6.QtCore import Qt

    return {
        Qt.Key.Key_Space.value: "SPACE",
        Qt.Key.Key_Up.value: "UP",
        Qt.Key.Key_Down.value: "DOWN",
        Qt.Key.Key_Left.value: "LEFT",
        Qt.Key.Key_Right.value: "RIGHT",
        Qt.Key.Key_Return.value: "ENTER",
        Qt.Key.Key_Enter.value: "ENTER",
        Qt.Key.Key_Escape.value: "ESCAPE",
        Qt.Key.Key_Tab.value: "TAB",
        Qt.Key.Key_Backspace.value: "BACKSPACE",
        Qt.Key.Key_Delete.value: "DELETE",
        Qt.Key.Key_Home.value: "HOME",
        Qt.Key.Key_End.value: "END",
        Qt.Key.Key_PageUp.value: "PAGEUP",
        Qt.Key.Key_PageDown.value: "PAGEDOWN",
    }


def descriptor_from_key_event(key, modifiers) -> Optional[HotkeyDescriptor]:
    """
    Build a descriptor from a Qt key-press.

    ``key`` is ``QKeyEvent.key()`` and ``modifiers`` is
    ``QKeyEvent.modifiers()``. Returns None for modifier-only presses and
    for keys that have no descriptor token, so the caller keeps listening.
    """
    from PySide6.QtCore import Qt

    key_value = getattr(key, "value", key)

    modifier_keys = {
        Qt.Key.Key_Control.value,
        Qt.Key.Key_Shift.value,
        Qt.Key.Key_Alt.value,
        Qt.Key.Key_Meta.value,
        Qt.Key.Key_AltGr.value,
    }
    if key_value in modifier_keys:
        return None

    token = _qt_key_names().get(key_value)
    if token is None:
        # Qt key codes for A-Z and 0-9 are their ASCII values
        if ord("A") <= key_value <= ord("Z") or ord("0") <= key_value <= ord("9"):
            token = chr(key_value)
        else:
            return None

    parts = []
    if modifiers & (
        Qt.KeyboardModifier.ControlModifier | Qt.KeyboardModifier.MetaModifier
    ):
        parts.append(COMMAND_OR_CONTROL)
    if modifiers & Qt.KeyboardModifier.AltModifier:
        parts.append(ALT)
    if modifiers & Qt.KeyboardModifier.ShiftModifier:
        parts.append(SHIFT)

    return HotkeyDescriptor(modifiers=tuple(parts), key=token)
