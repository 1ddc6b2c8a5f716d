"""Tests for configuration loading."""

import pytest

from javaslice.config import DEFAULT_CONFIG, apply_env_overrides, load_config


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config(environ={})
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_missing_explicit_config_exits(tmp_path):
    with pytest.raises(SystemExit):
        load_config(tmp_path / "missing.yaml", environ={})


def test_yaml_is_merged_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("report:\n  base_url: http://reports.internal\naudit:\n  max_entries: 10\n")

    config = load_config(path, environ={})

    assert config["report"]["base_url"] == "http://reports.internal"
    assert config["report"]["endpoint"] == DEFAULT_CONFIG["report"]["endpoint"]
    assert config["audit"]["max_entries"] == 10
    assert config["audit"]["max_bytes"] == 1024 * 1024


def test_empty_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path, environ={}) == DEFAULT_CONFIG


def test_env_overrides():
    config = apply_env_overrides(
        {"audit": {"max_entries": 50}},
        {"DB_AUDIT_LOG_MAX_DATA": "10", "DB_AUDIT_LOG_MAX_BYTES": "2048", "REPORT_API_KEY": "k"},
    )
    assert config["audit"] == {"max_entries": 10, "max_bytes": 2048}
    assert config["report"]["api_key"] == "k"


def test_invalid_env_override_is_ignored():
    config = apply_env_overrides({"audit": {"max_bytes": 7}}, {"DB_AUDIT_LOG_MAX_BYTES": "lots"})
    assert config["audit"]["max_bytes"] == 7
