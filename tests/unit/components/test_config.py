"""
Unit tests for configuration layering: defaults, toml file, environment.
"""

import os

import pytest
from jsonbench.config import Config, get_config, get_config_path, load_config, reset_config


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("JSONBENCH_"):
            monkeypatch.delenv(key)
    reset_config()
    yield tmp_path
    reset_config()


def write_config(home, text):
    path = home / "jsonbench" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text(text)
    return path


class TestDefaults:
    def test_ceilings(self, config_home):
        config = load_config()
        assert config.limits.max_nodes == 1000
        assert config.limits.max_depth == 50
        assert config.limits.max_path_length == 500
        assert config.limits.max_index == 10000
        assert config.limits.max_result_chars == 100_000

    def test_io(self, config_home):
        config = load_config()
        assert config.io.max_input_size == 10 * 1024 * 1024
        assert config.io.offload_threshold == 1024 * 1024

    def test_export(self, config_home):
        config = load_config()
        assert config.export.indent == 2
        assert config.export.xml_root == "root"
        assert config.export.xml_item == "item"
        assert config.export.csv_delimiter == ","


class TestConfigFile:
    def test_path_respects_xdg(self, config_home):
        assert get_config_path() == config_home / "jsonbench" / "config.toml"

    def test_toml_overrides(self, config_home):
        write_config(config_home, '[limits]\nmax_nodes = 10\n\n[export]\nxml_item = "entry"\n')
        config = load_config()
        assert config.limits.max_nodes == 10
        assert config.export.xml_item == "entry"
        assert config.limits.max_depth == 50

    def test_malformed_file_falls_back_to_defaults(self, config_home, caplog):
        write_config(config_home, "[limits\nmax_nodes = ")
        config = load_config()
        assert config == Config()
        assert "Ignoring config file" in caplog.text

    def test_bad_value_falls_back_to_defaults(self, config_home):
        write_config(config_home, '[limits]\nmax_nodes = "many"\n')
        assert load_config() == Config()


class TestEnvironment:
    def test_env_overrides_file(self, config_home, monkeypatch):
        write_config(config_home, "[limits]\nmax_depth = 10\n")
        monkeypatch.setenv("JSONBENCH_MAX_DEPTH", "7")
        assert load_config().limits.max_depth == 7

    def test_invalid_env_value_is_ignored(self, config_home, monkeypatch):
        monkeypatch.setenv("JSONBENCH_MAX_NODES", "lots")
        assert load_config().limits.max_nodes == 1000

    def test_string_setting(self, config_home, monkeypatch):
        monkeypatch.setenv("JSONBENCH_CSV_DELIMITER", ";")
        assert load_config().export.csv_delimiter == ";"


class TestCaching:
    def test_get_config_is_cached_until_reset(self, config_home, monkeypatch):
        first = get_config()
        assert get_config() is first
        monkeypatch.setenv("JSONBENCH_MAX_NODES", "5")
        assert get_config().limits.max_nodes == 1000
        reset_config()
        assert get_config().limits.max_nodes == 5
