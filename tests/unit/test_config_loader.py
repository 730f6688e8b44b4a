from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from rollbook.config.loader import ConfigLoadError, config_from_env, load_config, resolve_config
from rollbook.config.schema import RepositoryConfig


def test_load_json_config_with_defaults(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"index_strategy": "sorted", "history_limit": 5}),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.index_strategy == "sorted"
    assert config.history_limit == 5
    assert config.history_enabled is True
    assert config.score_policy == "permissive"
    assert config.default_fee == 1500


def test_load_yaml_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "score_policy: strict\n" "max_score: 50\n" "log_level: debug\n",
        encoding="utf-8",
    )

    config = load_config(config_path)
    assert config.score_policy == "strict"
    assert config.max_score == 50
    assert config.log_level == "DEBUG"


def test_empty_yaml_config_uses_defaults(tmp_path):
    config_path = tmp_path / "empty.yml"
    config_path.write_text("", encoding="utf-8")

    config = load_config(config_path)

    assert config.index_strategy == "hash"


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_invalid_config_value_raises_config_load_error(tmp_path):
    config_path = tmp_path / "invalid.json"
    config_path.write_text(json.dumps({"index_strategy": "btree"}), encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Invalid config .*invalid.json: index_strategy") as excinfo:
        load_config(config_path)
    assert isinstance(excinfo.value.__cause__, ValidationError)


def test_unknown_key_is_rejected(tmp_path):
    config_path = tmp_path / "extra.json"
    config_path.write_text(json.dumps({"colour": "blue"}), encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Invalid config .*colour"):
        load_config(config_path)


def test_malformed_yaml_raises_config_load_error(tmp_path):
    config_path = tmp_path / "broken.yaml"
    config_path.write_text("index_strategy: [hash\n", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Could not parse config"):
        load_config(config_path)


def test_malformed_json_raises_config_load_error(tmp_path):
    config_path = tmp_path / "broken.json"
    config_path.write_text("{index_strategy: hash", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Could not parse config"):
        load_config(config_path)


def test_non_mapping_root_raises(tmp_path):
    config_path = tmp_path / "list.json"
    config_path.write_text(json.dumps([1, 2]), encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Config root"):
        load_config(config_path)


def test_unsupported_extension_raises(tmp_path):
    config_path = tmp_path / "config.txt"
    config_path.write_text("index_strategy=hash", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Unsupported config format"):
        load_config(config_path)


def test_resolve_config_applies_overrides_over_file(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("index_strategy: sorted\nlog_level: warning\n", encoding="utf-8")

    config = resolve_config(config_path, overrides={"log_level": "debug", "history_limit": None})

    assert config.index_strategy == "sorted"
    assert config.log_level == "DEBUG"
    assert config.history_limit is None


def test_resolve_config_without_file_uses_defaults():
    assert resolve_config() == RepositoryConfig()


def test_invalid_override_raises_config_load_error():
    with pytest.raises(ConfigLoadError, match="Invalid config overrides: log_level"):
        resolve_config(overrides={"log_level": "verbose"})


def test_config_from_env(monkeypatch, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"index_strategy": "sorted"}), encoding="utf-8")

    monkeypatch.setenv("ROLLBOOK_CONFIG", str(config_path))
    assert config_from_env().index_strategy == "sorted"

    monkeypatch.setenv("ROLLBOOK_CONFIG", "  ")
    assert config_from_env() == RepositoryConfig()
