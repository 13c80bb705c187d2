"""Tests for runtime config loading and generation."""

import json

import pytest

from directivemig.config_runtime import DEFAULTS, load_runtime_config, write_default_config
from directivemig.errors import ConfigConflictError


def test_defaults_when_file_missing(tmp_path):
    cfg = load_runtime_config(tmp_path / "absent.json")
    assert cfg == DEFAULTS
    assert cfg is not DEFAULTS


def test_file_values_merged(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({
        "directives": {"manual_directives": ["// run-pass"], "target": "x86_64-unknown-linux-gnu"},
        "walk": {"extensions": [".rs", ".fixed"]},
    }))

    cfg = load_runtime_config(path)

    assert cfg["directives"]["manual_directives"] == ["// run-pass"]
    assert cfg["directives"]["target"] == "x86_64-unknown-linux-gnu"
    assert cfg["directives"]["match_mode"] == "line"
    assert cfg["walk"]["extensions"] == [".rs", ".fixed"]


def test_wrong_types_and_unknown_keys_ignored(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({
        "directives": {"manual_directives": "// run-pass", "bogus": 1},
        "report": {"progress_interval": "often"},
    }))

    cfg = load_runtime_config(path)

    assert cfg["directives"]["manual_directives"] == []
    assert "bogus" not in cfg["directives"]
    assert cfg["report"]["progress_interval"] == 500


def test_invalid_json_falls_back_to_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json")
    assert load_runtime_config(path) == DEFAULTS


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("DIRECTIVEMIG_DIRECTIVES_MANUAL_DIRECTIVES", "// run-pass\n// check-pass\n")
    monkeypatch.setenv("DIRECTIVEMIG_REPORT_PROGRESS_INTERVAL", "10")
    monkeypatch.setenv("DIRECTIVEMIG_DIRECTIVES_MATCH_MODE", "body")

    cfg = load_runtime_config(tmp_path / "absent.json")

    assert cfg["directives"]["manual_directives"] == ["// run-pass", "// check-pass"]
    assert cfg["report"]["progress_interval"] == 10
    assert cfg["directives"]["match_mode"] == "body"


def test_env_manual_directives_keep_commas(tmp_path, monkeypatch):
    """Manual directives are newline separated; commas belong to the directive."""
    monkeypatch.setenv(
        "DIRECTIVEMIG_DIRECTIVES_MANUAL_DIRECTIVES",
        "// compile-flags: -C target-feature=+a,+b\r\n//[x] edition: 2021",
    )

    cfg = load_runtime_config(tmp_path / "absent.json")

    assert cfg["directives"]["manual_directives"] == [
        "// compile-flags: -C target-feature=+a,+b",
        "//[x] edition: 2021",
    ]


def test_invalid_env_int_keeps_default(tmp_path, monkeypatch):
    monkeypatch.setenv("DIRECTIVEMIG_REPORT_PROGRESS_INTERVAL", "lots")
    assert load_runtime_config(tmp_path / "absent.json")["report"]["progress_interval"] == 500


def test_write_default_config(tmp_path):
    path = write_default_config(tmp_path / "sub" / "directivemig.json")
    assert json.loads(path.read_text()) == DEFAULTS


def test_write_default_config_refuses_overwrite(tmp_path):
    path = tmp_path / "directivemig.json"
    path.write_text('{"keep": true}')

    with pytest.raises(ConfigConflictError):
        write_default_config(path)

    assert path.read_text() == '{"keep": true}'
