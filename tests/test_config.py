"""Tests for user configuration persistence."""

import json

from overlord.interface.config import (
    DEFAULT_CONFIG,
    get_config_path,
    load_config,
    save_config,
    set_animate_text,
    set_player,
)


class TestConfig:
    """Test loading and saving preferences."""

    def test_defaults_when_missing(self, tmp_path):
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_defaults_are_not_shared(self, tmp_path):
        config = load_config(tmp_path)
        config["player_name"] = "Daisy"
        assert DEFAULT_CONFIG["player_name"] == ""

    def test_save_and_load(self, tmp_path):
        config = load_config(tmp_path)
        config["seed"] = 42
        config["text_speed"] = 0.0

        assert save_config(config, tmp_path) is True
        loaded = load_config(tmp_path)
        assert loaded["seed"] == 42
        assert loaded["text_speed"] == 0.0

    def test_missing_keys_filled_from_defaults(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({"seed": 7}), encoding="utf-8")
        loaded = load_config(tmp_path)
        assert loaded["seed"] == 7
        assert loaded["animate_text"] is True

    def test_unknown_keys_dropped(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({"volume": 11}), encoding="utf-8")
        assert "volume" not in load_config(tmp_path)

    def test_corrupt_file_gives_defaults(self, tmp_path):
        get_config_path(tmp_path).write_text("{oops", encoding="utf-8")
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / ".overlord"
        save_config(DEFAULT_CONFIG.copy(), target)
        assert get_config_path(target).exists()

    def test_set_player(self, tmp_path):
        set_player("Daisy", "female", tmp_path)
        loaded = load_config(tmp_path)
        assert loaded["player_name"] == "Daisy"
        assert loaded["gender"] == "female"

    def test_set_animate_text(self, tmp_path):
        set_animate_text(False, tmp_path)
        assert load_config(tmp_path)["animate_text"] is False
