"""
Provider-agnostic interfaces (Protocols) for the registry and provider layers.

Re-exports the single-class modules under
``conduit_providers.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import (
    MediaProvider,
    ModuleSource,
    ProviderConstructor,
    UpstreamAPIClient,
)

__all__ = [
    "MediaProvider",
    "ModuleSource",
    "ProviderConstructor",
    "UpstreamAPIClient",
]
