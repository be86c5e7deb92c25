from .settings import (
    APP_NAME,
    DEFAULT_SHORTCUT,
    Settings,
    get_data_dir,
    get_settings,
    get_settings_file,
    reload_settings,
)

__all__ = [
    "APP_NAME",
    "DEFAULT_SHORTCUT",
    "Settings",
    "get_data_dir",
    "get_settings",
    "get_settings_file",
    "reload_settings",
]
