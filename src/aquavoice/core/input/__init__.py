from .descriptor import HotkeyDescriptor, descriptor_from_key_event
from .hotkey import HotkeyRegistrar

__all__ = ["HotkeyDescriptor", "HotkeyRegistrar", "descriptor_from_key_event"]
