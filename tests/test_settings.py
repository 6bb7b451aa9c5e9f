from pathlib import Path

import pytest

from ai_output_guard.config import GuardConfig
from ai_output_guard.sanitize import DEFAULT_RULES
from ai_output_guard.settings import build_guard_config, get_provider_config, load_settings


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_load_settings_merges_local_override(tmp_path, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    base = _write(tmp_path / "settings.yaml", "provider: openai\nllm:\n  openai:\n    model: gpt-4o-mini\n    api_key: ''\n")
    _write(tmp_path / "settings.local.yaml", "llm:\n  openai:\n    api_key: sk-local\n")

    settings = load_settings(str(base))

    assert get_provider_config(settings, "openai") == {"model": "gpt-4o-mini", "api_key": "sk-local"}


def test_env_key_wins(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    base = _write(tmp_path / "settings.yaml", "llm:\n  openai:\n    api_key: sk-file\n")

    settings = load_settings(str(base))

    assert get_provider_config(settings)["api_key"] == "sk-env"


def test_missing_settings_file(tmp_path):
    with pytest.raises(RuntimeError):
        load_settings(str(tmp_path / "nope.yaml"))


def test_shipped_settings_file_matches_defaults(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    path = Path(__file__).resolve().parent.parent / "config" / "settings.yaml"
    cfg = build_guard_config(load_settings(str(path)))
    assert cfg == GuardConfig()


def test_build_guard_config_defaults():
    assert build_guard_config({}) == GuardConfig()


def test_build_guard_config_overrides():
    settings = {
        "guard": {
            "labels": ["Parameters:"],
            "token_format": "<<<LBL_{n}>>>",
            "leak_patterns": [r"<<<LBL_\d+>>>"],
            "label_prefixes": [],
        },
        "sanitizer": {"replace": {"&amp;": "&"}},
    }
    cfg = build_guard_config(settings)

    assert cfg.labels == ["Parameters:"]
    assert cfg.token_format == "<<<LBL_{n}>>>"
    assert cfg.leak_patterns == [r"<<<LBL_\d+>>>"]
    assert cfg.label_prefixes == []
    assert cfg.label_suffixes == GuardConfig().label_suffixes
    assert cfg.sanitizer_rules == [("&amp;", "&")]


def test_build_guard_config_rejects_bad_values():
    with pytest.raises(ValueError):
        build_guard_config({"guard": {"labels": "Required parameters:"}})
    with pytest.raises(ValueError):
        build_guard_config({"guard": {"token_format": "<<<TOKEN>>>"}})


def test_sanitizer_rules_from_separate_file(tmp_path):
    _write(tmp_path / "sanitize.yaml", 'replace:\n  "&nbsp;": " "\n')
    settings = {"sanitizer": {"path": "sanitize.yaml", "replace": {"&amp;": "&"}}}

    cfg = build_guard_config(settings, base_dir=str(tmp_path))

    assert cfg.sanitizer_rules == [("&nbsp;", " ")]


def test_missing_sanitizer_file_keeps_builtin_table(tmp_path):
    cfg = build_guard_config({"sanitizer": {"path": str(tmp_path / "absent.yaml")}})
    assert cfg.sanitizer_rules == DEFAULT_RULES
