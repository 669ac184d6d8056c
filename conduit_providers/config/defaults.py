"""conduit_providers.config.defaults
=================================

Central place for small, stable default values used across the package.
These defaults can be overridden via environment variables or an external
configuration file, but provide sensible fallbacks for local development and
tests.

This module intentionally avoids importing from other provider packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- OpenRouter ----
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
# Client identification headers sent with every request.
OPENROUTER_DEFAULT_HTTP_REFERER = "https://MediaConduit.ai"
OPENROUTER_DEFAULT_X_TITLE = "MediaConduit AI"
OPENROUTER_PRICING_CURRENCY = "USD"

# ---- Generation parameter schema (applied to every discovered model) ----
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1024
DEFAULT_MAX_TOKENS_CEILING = 4096
DEFAULT_TOP_P = 1.0

# ---- Module source aliases ----
# Identifier -> import path ("package.module:Attribute") understood by
# ImportModuleSource. Remote repository URLs resolve to the in-tree adapter.
PROVIDER_SOURCE_ALIASES = {
    "openrouter": "conduit_providers.openrouter:OpenRouterProvider",
    "https://github.com/MediaConduit/openrouter-provider": "conduit_providers.openrouter:OpenRouterProvider",
}

# ---- CLI ----
PROVIDER_CLI_DEFAULT_PROVIDER = "https://github.com/MediaConduit/openrouter-provider"
PROVIDER_CLI_DEFAULT_PROMPT = "Write a haiku about APIs"
PROVIDER_CLI_DISCOVERY_WAIT_SECONDS = 30.0


__all__ = [
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_HTTP_REFERER",
    "OPENROUTER_DEFAULT_X_TITLE",
    "OPENROUTER_PRICING_CURRENCY",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_MAX_TOKENS_CEILING",
    "DEFAULT_TOP_P",
    "PROVIDER_SOURCE_ALIASES",
    "PROVIDER_CLI_DEFAULT_PROVIDER",
    "PROVIDER_CLI_DEFAULT_PROMPT",
    "PROVIDER_CLI_DISCOVERY_WAIT_SECONDS",
]
