from pathlib import Path

from slidedraft.utils.config import debug_dump_config, load_config, resolve_setting, save_config


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.toml")
    assert cfg["_meta"]["source"] == "defaults"
    assert set(cfg) == {"_meta"}


def test_save_then_load_profile(tmp_path):
    path = tmp_path / "config.toml"
    save_config(path, "work", {"llm_provider": "ollama", "model": "phi3", "max_new_tokens": 80})
    cfg = load_config(path, "work")
    assert cfg["model"] == "phi3"
    assert cfg["max_new_tokens"] == 80
    assert cfg["_meta"]["source"] == "file"


def test_unknown_profile_falls_back_to_default(tmp_path):
    path = tmp_path / "config.toml"
    save_config(path, "default", {"tone": "Academic"})
    cfg = load_config(path, "missing")
    assert cfg["tone"] == "Academic"
    assert cfg["_meta"]["profile"] == "default"


def test_nested_llm_table_and_quotes_survive(tmp_path):
    path = tmp_path / "config.toml"
    save_config(path, "default", {"llm": {"provider": "openai_compat", "api_key": 'a"b\\c'}})
    cfg = load_config(path)
    assert cfg["llm"]["api_key"] == 'a"b\\c'


def test_directory_path_uses_config_toml(tmp_path):
    save_config(tmp_path, "default", {"tone": "Engaging"})
    assert (Path(tmp_path) / "config.toml").exists()
    assert load_config(tmp_path)["tone"] == "Engaging"


def test_redaction():
    out = debug_dump_config({"api_key": "s3cret", "model": "m", "llm": {"api_key": "x"}})
    assert out["api_key"] == "***"
    assert out["llm"]["api_key"] == "***"
    assert out["model"] == "m"


def test_resolve_setting_precedence():
    cfg = {"tone": "Academic"}
    assert resolve_setting("tone", "Engaging", cfg) == "Engaging"
    assert resolve_setting("tone", None, cfg) == "Academic"
    assert resolve_setting("output", None, cfg, "deck.html") == "deck.html"
