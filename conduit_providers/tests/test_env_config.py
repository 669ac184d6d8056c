from __future__ import annotations

import json

from conduit_providers.config import get_provider_config, reset_config_cache
from conduit_providers.config.defaults import OPENROUTER_DEFAULT_BASE_URL
from conduit_providers.config.env import (
    ENV_ALIASES,
    ENV_MAP,
    get_env_api_key,
    get_env_var_names,
    is_placeholder,
)


def test_env_map_contains_openrouter():
    assert ENV_MAP["openrouter"] == "OPENROUTER_API_KEY"
    assert ENV_ALIASES["openrouter"][0] == "OPENROUTER_API_KEY"
    assert get_env_var_names("OpenRouter") == ENV_ALIASES["openrouter"]
    assert get_env_var_names("unknown") == ()


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")
    assert is_placeholder("ChangeMe123")
    assert is_placeholder("example-key")
    assert is_placeholder("test_token")
    assert not is_placeholder("sk-or-v1-real")
    assert not is_placeholder(None)


def test_env_api_key_prefers_canonical_and_skips_placeholders(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "changeme")
    monkeypatch.setenv("OPENROUTER_KEY", "sk-or-alias")
    assert get_env_api_key("openrouter") == "sk-or-alias"
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-canon")
    assert get_env_api_key("openrouter") == "sk-or-canon"


def test_defaults_without_any_source():
    cfg = get_provider_config("openrouter")
    assert cfg["base_url"] == OPENROUTER_DEFAULT_BASE_URL
    assert cfg["http_referer"] == "https://MediaConduit.ai"
    assert cfg["x_title"] == "MediaConduit AI"
    assert "api_key" not in cfg


def test_merge_precedence_file_env_overrides(monkeypatch, tmp_path):
    path = tmp_path / "conduit.json"
    path.write_text(
        json.dumps({"openrouter": {"base_url": "https://file.local/v1", "x_title": "File Title", "api_key": "sk-file"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("CONDUIT_CONFIG_FILE", str(path))
    monkeypatch.setenv("OPENROUTER_BASE_URL", "https://env.local/v1")
    reset_config_cache()

    cfg = get_provider_config("openrouter", overrides={"x_title": "Override", "http_referer": None})
    assert cfg["base_url"] == "https://env.local/v1"
    assert cfg["x_title"] == "Override"
    assert cfg["http_referer"] == "https://MediaConduit.ai"
    assert cfg["api_key"] == "sk-file"


def test_yaml_config_file_and_placeholder_key(monkeypatch, tmp_path):
    path = tmp_path / "conduit.yaml"
    path.write_text("openrouter:\n  api_key: placeholder\n  x_title: Yaml Title\n", encoding="utf-8")
    monkeypatch.setenv("CONDUIT_CONFIG_FILE", str(path))
    reset_config_cache()

    cfg = get_provider_config("openrouter")
    assert cfg["x_title"] == "Yaml Title"
    assert "api_key" not in cfg


def test_dotenv_replaces_placeholder_variables(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("# comment\nOPENROUTER_API_KEY='sk-or-from-dotenv'\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    # placeholder values are replaced by the .env loader; monkeypatch restores the variable afterwards
    monkeypatch.setenv("OPENROUTER_API_KEY", "placeholder")
    reset_config_cache()

    assert get_provider_config("openrouter")["api_key"] == "sk-or-from-dotenv"
