"""Tests for configuration records and loaders."""

import json

import pytest

from bftape.core import config as config_module
from bftape.core.config import (
    MEMORY_SIZE,
    BrainfuckConfig,
    load_config,
    load_config_file,
    parse_memory_size,
)
from bftape.core.errors import ConfigError


class TestBrainfuckConfig:
    """Tests for the configuration record."""

    def test_defaults(self) -> None:
        config = BrainfuckConfig()
        assert not config.wrap_memory
        assert not config.debug_mode
        assert not config.eof_behavior
        assert not config.interactive_input
        assert config.memory_size > 0
        assert config.max_nested_loops > 0

    def test_is_immutable(self) -> None:
        config = BrainfuckConfig()
        with pytest.raises(AttributeError):
            config.memory_size = 5  # type: ignore[misc]

    @pytest.mark.parametrize("size", [0, -1, True, "10"])
    def test_rejects_bad_memory_size(self, size) -> None:
        with pytest.raises(ConfigError):
            BrainfuckConfig(memory_size=size)

    @pytest.mark.parametrize("field", ["wrap_memory", "debug_mode", "eof_behavior", "interactive_input"])
    @pytest.mark.parametrize("value", ["false", 0, 1, None])
    def test_rejects_non_bool_flags(self, field, value) -> None:
        with pytest.raises(ConfigError, match=field):
            BrainfuckConfig(**{field: value})

    def test_rejects_bad_nesting_limit(self) -> None:
        with pytest.raises(ConfigError):
            BrainfuckConfig(max_nested_loops=0)

    def test_overrides_skip_none(self) -> None:
        config = BrainfuckConfig(memory_size=10).with_overrides(memory_size=None, wrap_memory=True)
        assert config.memory_size == 10
        assert config.wrap_memory

    def test_describe(self) -> None:
        config = BrainfuckConfig(memory_size=100, wrap_memory=True, eof_behavior=True)
        assert config.describe() == (
            "Configuration: Memory Size=100, Wrapping=Enabled, Debug=Disabled, EOF=Set to 0"
        )

    def test_from_dict_rejects_unknown_keys(self) -> None:
        with pytest.raises(ConfigError, match="tape_size"):
            BrainfuckConfig.from_dict({"tape_size": 10})


class TestParseMemorySize:
    """Tests for -m value handling."""

    @pytest.mark.parametrize("text,expected", [
        ("100", 100),
        ("100abc", 100),
        ("  42", 42),
        ("abc", MEMORY_SIZE),
        ("0", MEMORY_SIZE),
        ("-5", MEMORY_SIZE),
        ("", MEMORY_SIZE),
        (7, 7),
    ])
    def test_values(self, text, expected) -> None:
        assert parse_memory_size(text) == expected

    def test_fallback_follows_env_default(self, monkeypatch) -> None:
        """A BF_MEMORY_SIZE override also moves the fallback for bad -m values."""
        monkeypatch.setattr(config_module, "MEMORY_SIZE", 123)
        assert parse_memory_size("abc") == 123
        assert parse_memory_size("0") == 123
        assert parse_memory_size("64") == 64


class TestConfigFiles:
    """Tests for YAML and JSON config files."""

    def test_yaml(self, tmp_path) -> None:
        path = tmp_path / "bf.yaml"
        path.write_text("wrap_memory: true\nmemory_size: 64\n")
        config = load_config(str(path))
        assert config.wrap_memory
        assert config.memory_size == 64

    def test_json(self, tmp_path) -> None:
        path = tmp_path / "bf.json"
        path.write_text(json.dumps({"eof_behavior": True, "max_nested_loops": 5}))
        config = load_config(str(path))
        assert config.eof_behavior
        assert config.max_nested_loops == 5

    def test_quoted_bool_is_rejected(self, tmp_path) -> None:
        """A string such as "false" must not silently enable an option."""
        path = tmp_path / "bf.json"
        path.write_text(json.dumps({"wrap_memory": "false"}))
        with pytest.raises(ConfigError, match="wrap_memory"):
            load_config(str(path))

    def test_yaml_bools(self, tmp_path) -> None:
        path = tmp_path / "bf.yaml"
        path.write_text("wrap_memory: false\neof_behavior: yes\n")
        config = load_config(str(path))
        assert config.wrap_memory is False
        assert config.eof_behavior is True

    def test_zero_size_in_file_falls_back(self, tmp_path) -> None:
        path = tmp_path / "bf.yml"
        path.write_text("memory_size: 0\n")
        assert load_config(str(path)).memory_size == MEMORY_SIZE

    def test_overrides_win_over_file(self, tmp_path) -> None:
        path = tmp_path / "bf.yaml"
        path.write_text("memory_size: 64\ndebug_mode: true\n")
        config = load_config(str(path), memory_size=8, debug_mode=None)
        assert config.memory_size == 8
        assert config.debug_mode

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config_file(str(path)) == {}

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="Could not read"):
            load_config_file(str(tmp_path / "nope.yaml"))

    def test_malformed_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Could not parse"):
            load_config_file(str(path))

    def test_non_mapping(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(str(path))

    def test_no_file_uses_defaults(self) -> None:
        assert load_config(None, wrap_memory=True) == BrainfuckConfig(wrap_memory=True)
