"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (base URLs, client identification headers).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by CONDUIT_CONFIG_FILE
    3. Environment variables (e.g. OPENROUTER_API_KEY, OPENROUTER_BASE_URL),
       after a one-time ``.env`` load
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider: str)``.

Environment Variable Conventions
--------------------------------
<PROVIDER>_API_KEY, <PROVIDER>_BASE_URL, <PROVIDER>_HTTP_REFERER, <PROVIDER>_X_TITLE
e.g. OPENROUTER_API_KEY, OPENROUTER_BASE_URL.

External Config File (Optional)
-------------------------------
If CONDUIT_CONFIG_FILE is set to a path, JSON is tried first, then YAML.
Structure example:

```
openrouter:
  base_url: https://openrouter.ai/api/v1
  x_title: My Host App
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_HTTP_REFERER,
    OPENROUTER_DEFAULT_X_TITLE,
)
from .env import get_env_api_key, is_placeholder

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openrouter": {
        "base_url": OPENROUTER_DEFAULT_BASE_URL,
        "http_referer": OPENROUTER_DEFAULT_HTTP_REFERER,
        "x_title": OPENROUTER_DEFAULT_X_TITLE,
    },
}

ENV_FIELD_MAP = {
    "base_url": "BASE_URL",
    "http_referer": "HTTP_REFERER",
    "x_title": "X_TITLE",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables are only overridden when their current value looks
    like a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("CONDUIT_CONFIG_FILE")
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached config file and ``.env`` state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    if key := get_env_api_key(provider):
        out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    A placeholder ``api_key`` coming from the config file is dropped.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg
        if is_placeholder(cfg.get("api_key")):
            cfg.pop("api_key", None)

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "reset_config_cache",
]
