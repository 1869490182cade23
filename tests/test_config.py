"""
Tests for the configuration loader.

Run with:  python -m pytest tests/test_config.py -v
"""

import json

import pytest

from textconsole.config import (
    DEFAULT_PROMPT,
    DEFAULT_UNRECOGNIZED_INPUT_TEXT,
    ConsoleConfig,
    load_config,
)


class TestDefaults:

    def test_empty_directory(self, tmp_path):
        config = load_config(cwd=tmp_path, environ={})
        assert config.prompt_text == DEFAULT_PROMPT == ">_"
        assert config.unrecognized_input_text == DEFAULT_UNRECOGNIZED_INPUT_TEXT
        assert config.blank_input_command is None
        assert config.log_level is None
        assert config.enable_completion is True
        assert config.history_file_path is None
        assert config.extra == {}

    def test_dataclass_defaults_match_loader(self, tmp_path):
        loaded = load_config(cwd=tmp_path, environ={})
        assert ConsoleConfig() == loaded


class TestFiles:

    def test_toml_nested_keys(self, tmp_path):
        (tmp_path / "config.toml").write_text(
            'prompt = "tc> "\n[log]\nlevel = "debug"\nfile_path = "console.log"\n',
            encoding="utf-8",
        )
        config = load_config(cwd=tmp_path, environ={})
        assert config.prompt_text == "tc> "
        assert config.log_level == "DEBUG"
        assert config.log_file_path == (tmp_path / "console.log").resolve()

    def test_env_file_with_prefix_and_quotes(self, tmp_path):
        (tmp_path / ".env").write_text(
            '# comment\nTEXTCONSOLE_UNRECOGNIZED_INPUT_TEXT="Say again?"\nENABLE_COMPLETION=off\n',
            encoding="utf-8",
        )
        config = load_config(cwd=tmp_path, environ={})
        assert config.unrecognized_input_text == "Say again?"
        assert config.enable_completion is False

    def test_ini_sections_flattened(self, tmp_path):
        (tmp_path / "config.ini").write_text(
            "[console]\nblank_input_command = help\n", encoding="utf-8")
        config = load_config(cwd=tmp_path, environ={})
        assert config.blank_input_command == "help"

    def test_json_and_unknown_keys_kept(self, tmp_path):
        (tmp_path / "config.json").write_text(
            json.dumps({"history_file_path": "hist.txt", "theme": "dark"}), encoding="utf-8")
        config = load_config(cwd=tmp_path, environ={})
        assert config.history_file_path == (tmp_path / "hist.txt").resolve()
        assert config.extra == {"THEME": "dark"}

    def test_toml_overrides_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("PROMPT=env\n", encoding="utf-8")
        (tmp_path / "config.toml").write_text('prompt = "toml"\n', encoding="utf-8")
        assert load_config(cwd=tmp_path, environ={}).prompt_text == "toml"

    def test_broken_toml_raises(self, tmp_path):
        (tmp_path / "config.toml").write_text("prompt = \n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid TOML"):
            load_config(cwd=tmp_path, environ={})


class TestEnvironment:

    def test_environment_wins(self, tmp_path):
        (tmp_path / "config.toml").write_text('prompt = "toml"\n', encoding="utf-8")
        config = load_config(cwd=tmp_path, environ={"TEXTCONSOLE_PROMPT": "env> "})
        assert config.prompt_text == "env> "

    def test_unprefixed_variables_ignored(self, tmp_path):
        config = load_config(cwd=tmp_path, environ={"PROMPT": "nope", "LOG_LEVEL": "bogus"})
        assert config.prompt_text == DEFAULT_PROMPT
        assert config.log_level is None

    def test_empty_prompt_kept(self, tmp_path):
        config = load_config(cwd=tmp_path, environ={"TEXTCONSOLE_PROMPT": ""})
        assert config.prompt_text == ""


class TestValidation:

    def test_bad_log_level(self, tmp_path):
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            load_config(cwd=tmp_path, environ={"TEXTCONSOLE_LOG_LEVEL": "loud"})

    def test_bad_bool(self, tmp_path):
        with pytest.raises(ValueError, match="boolean"):
            load_config(cwd=tmp_path, environ={"TEXTCONSOLE_ENABLE_COMPLETION": "maybe"})

    def test_blank_command_must_be_one_alias(self, tmp_path):
        with pytest.raises(ValueError, match="single alias"):
            load_config(cwd=tmp_path, environ={"TEXTCONSOLE_BLANK_INPUT_COMMAND": "two words"})

    def test_none_string_means_unset(self, tmp_path):
        config = load_config(cwd=tmp_path, environ={"TEXTCONSOLE_BLANK_INPUT_COMMAND": "none"})
        assert config.blank_input_command is None
