import json
from unittest.mock import patch

from main_config import (
    DEFAULT_CONFIG,
    deep_merge,
    get_scoring_config,
    get_server_config,
    get_wikipedia_config,
    load_config,
    resolve_config_path,
    save_config,
)

def test_deep_merge_keeps_untouched_keys():
    base = {"scoring": {"base_points": 7, "hint_penalty": 1}, "server": {"port": 5000}}
    merged = deep_merge(base, {"scoring": {"hint_penalty": 2}})
    assert merged == {"scoring": {"base_points": 7, "hint_penalty": 2}, "server": {"port": 5000}}
    assert base["scoring"]["hint_penalty"] == 1

def test_load_config_merges_file_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"scoring": {"base_points": 10}, "server": {"port": 8080}}))

    config = load_config(str(path))

    assert config["scoring"]["base_points"] == 10
    assert config["scoring"]["hint_penalty"] == DEFAULT_CONFIG["scoring"]["hint_penalty"]
    assert config["server"]["port"] == 8080
    assert config["wikipedia"] == DEFAULT_CONFIG["wikipedia"]

def test_load_config_missing_file_uses_defaults(tmp_path):
    with patch('main_config.logger') as mock_logger:
        config = load_config(str(tmp_path / "missing.json"))
    assert config == DEFAULT_CONFIG
    mock_logger.warning.assert_called_once_with("Config file not found, using defaults")

def test_load_config_invalid_json_uses_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with patch('main_config.logger') as mock_logger:
        config = load_config(str(path))
    assert config == DEFAULT_CONFIG
    mock_logger.error.assert_called_once()

def test_loaded_defaults_are_a_copy(tmp_path):
    config = load_config(str(tmp_path / "missing.json"))
    config["scoring"]["base_points"] = 99
    assert DEFAULT_CONFIG["scoring"]["base_points"] == 7

def test_resolve_config_path(monkeypatch):
    monkeypatch.delenv("WIKIGUESS_CONFIG", raising=False)
    assert resolve_config_path() == "config.json"
    monkeypatch.setenv("WIKIGUESS_CONFIG", "/etc/wikiguess.json")
    assert resolve_config_path() == "/etc/wikiguess.json"
    assert resolve_config_path("local.json") == "local.json"

def test_save_and_reload(tmp_path):
    path = str(tmp_path / "config.json")
    save_config({"server": {"host": "127.0.0.1"}}, path)
    assert load_config(path)["server"] == {"host": "127.0.0.1", "port": 5000}

def test_section_getters_fill_defaults():
    config = {"scoring": {"max_hints": 5}, "wikipedia": {"enabled": False}}
    scoring = get_scoring_config(config)
    assert scoring["max_hints"] == 5
    assert scoring["base_points"] == 7
    wikipedia = get_wikipedia_config(config)
    assert wikipedia["enabled"] is False
    assert wikipedia["timeout"] == 10
    assert get_server_config({}) == DEFAULT_CONFIG["server"]
