"""
Settings management with JSON persistence.

Handles loading and saving the user's settings file.
Uses platformdirs for cross-platform directory resolution.
"""

import json
import os
from pathlib import Path
from typing import Optional

from platformdirs import user_data_path
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ... import __app_name__
from ...utils.logger import get_logger
from ..errors import ConfigLoadError
from .config import DEFAULT_MODEL

logger = get_logger(__name__)

APP_NAME = __app_name__
SETTINGS_FILENAME = "settings.json"
DEFAULT_SHORTCUT = "CommandOrControl+Shift+Space"


def get_data_dir() -> Path:
    return user_data_path(APP_NAME, ensure_exists=True)


def get_settings_file() -> Path:
    return get_data_dir() / SETTINGS_FILENAME


class Settings(BaseModel):
    """
    Persisted user configuration.

    Field names are snake_case in Python and camelCase on disk. Keys that
    are not part of the model are ignored on load and so dropped on the
    next save.
    """

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", validate_assignment=False
    )

    api_key: str = Field(default="", alias="apiKey")
    shortcut: str = DEFAULT_SHORTCUT
    model: str = DEFAULT_MODEL
    input_device: Optional[str] = Field(default=None, alias="inputDevice")

    @classmethod
    def load(cls) -> "Settings":
        settings_file = get_settings_file()

        if not settings_file.exists():
            return cls()

        try:
            with open(settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ConfigLoadError(
                    f"expected a JSON object, got {type(data).__name__}"
                )

            return cls.model_validate(data)
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            ValidationError,
            ConfigLoadError,
        ) as e:
            logger.warning(f"Could not load settings: {e}. Using defaults.")
            return cls()

    def save(self) -> None:
        settings_file = get_settings_file()
        settings_file.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(by_alias=True)

        # Write next to the target then swap, so a reader never sees half a file
        tmp_file = settings_file.with_name(settings_file.name + ".tmp")
        with open(tmp_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_file, settings_file)

        logger.debug(f"Settings saved to {settings_file}")

    def masked_api_key(self) -> str:
        if not self.api_key:
            return "<unset>"
        return self.api_key[:5] + "..."


_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings.load()
    return _settings_instance


def reload_settings() -> Settings:
    global _settings_instance
    _settings_instance = Settings.load()
    return _settings_instance
