"""conduit_providers.config.env
============================

Environment variable mapping and helpers for provider credentials.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``; ``ENV_ALIASES`` lists extra
  accepted names with the canonical name first to establish precedence.
- Helpers never raise on unknown providers or unset variables; callers decide
  how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openrouter": "OPENROUTER_API_KEY",
}

# Provider -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "openrouter": ("OPENROUTER_API_KEY", "OPENROUTER_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_names(provider: str) -> Tuple[str, ...]:
    """Return accepted env var names for ``provider`` (canonical first)."""
    name = (provider or "").lower().strip()
    if name in ENV_ALIASES:
        return ENV_ALIASES[name]
    canonical = ENV_MAP.get(name)
    return (canonical,) if canonical else ()


def get_env_api_key(provider: str) -> Optional[str]:
    """Return the first non-empty, non-placeholder API key set for ``provider``."""
    for var in get_env_var_names(provider):
        val = os.getenv(var)
        if val and val.strip() and not is_placeholder(val):
            return val.strip()
    return None


__all__ = ["ENV_MAP", "ENV_ALIASES", "is_placeholder", "get_env_var_names", "get_env_api_key"]
