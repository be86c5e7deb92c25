"""Tests for Settings persistence."""

import json

from aquavoice.core.settings import DEFAULT_SHORTCUT, Settings
from aquavoice.core.settings.config import DEFAULT_MODEL


class TestSettings:
    def test_default_values(self):
        settings = Settings()
        assert settings.api_key == ""
        assert settings.shortcut == DEFAULT_SHORTCUT
        assert settings.model == DEFAULT_MODEL
        assert settings.input_device is None

    def test_save_load_cycle(self, data_dir):
        original = Settings(
            api_key="AIzaTestKey",
            shortcut="Alt+R",
            model="gemini-2.5-flash",
            input_device="Test Mic",
        )
        original.save()

        assert (data_dir / "settings.json").exists()
        assert Settings.load() == original

    def test_load_nonexistent_returns_defaults(self, data_dir):
        assert Settings.load() == Settings()

    def test_saved_file_uses_camel_case(self, data_dir):
        Settings(api_key="k", input_device="USB Mic").save()

        data = json.loads((data_dir / "settings.json").read_text(encoding="utf-8"))
        assert data["apiKey"] == "k"
        assert data["inputDevice"] == "USB Mic"
        assert data["shortcut"] == DEFAULT_SHORTCUT
        assert "api_key" not in data

    def test_partial_file_fills_defaults(self, data_dir):
        (data_dir / "settings.json").write_text(
            json.dumps({"apiKey": "abc"}), encoding="utf-8"
        )

        settings = Settings.load()
        assert settings.api_key == "abc"
        assert settings.shortcut == DEFAULT_SHORTCUT

    def test_unknown_keys_dropped_on_save(self, data_dir):
        settings_file = data_dir / "settings.json"
        settings_file.write_text(
            json.dumps({"apiKey": "abc", "theme": "dark"}), encoding="utf-8"
        )

        Settings.load().save()

        data = json.loads(settings_file.read_text(encoding="utf-8"))
        assert "theme" not in data
        assert data["apiKey"] == "abc"

    def test_corrupt_file_returns_defaults(self, data_dir):
        (data_dir / "settings.json").write_text("{not json", encoding="utf-8")
        assert Settings.load() == Settings()

    def test_non_object_file_returns_defaults(self, data_dir):
        (data_dir / "settings.json").write_text("[1, 2, 3]", encoding="utf-8")
        assert Settings.load() == Settings()

    def test_wrong_field_type_returns_defaults(self, data_dir):
        (data_dir / "settings.json").write_text(
            json.dumps({"apiKey": ["not", "a", "string"]}), encoding="utf-8"
        )
        assert Settings.load() == Settings()

    def test_save_creates_missing_directory(self, tmp_path, monkeypatch):
        nested = tmp_path / "a" / "b"
        monkeypatch.setattr(
            "aquavoice.core.settings.settings.get_data_dir", lambda: nested
        )

        Settings(api_key="k").save()

        assert (nested / "settings.json").exists()

    def test_save_leaves_no_temp_file(self, data_dir):
        Settings(api_key="k").save()
        Settings(api_key="k2").save()

        assert sorted(p.name for p in data_dir.iterdir()) == ["settings.json"]
        assert Settings.load().api_key == "k2"

    def test_masked_api_key(self):
        assert Settings().masked_api_key() == "<unset>"
        assert Settings(api_key="AIzaSecretValue").masked_api_key() == "AIzaS..."

    def test_populate_by_field_name_or_alias(self):
        assert Settings(apiKey="a").api_key == "a"
        assert Settings(api_key="b").api_key == "b"
