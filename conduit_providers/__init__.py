"""conduit_providers package

Dynamic provider registry and capability-indexed model catalogs for media
providers, with an OpenRouter text-to-text adapter.

Purpose:
    Give host applications one entry point for turning a provider identifier
    (a repository URL, an alias, or an import path) into a live, configured
    provider, and for querying the models that provider discovered.

Public API (re-exported):
    - Version: ``__version__``
    - Registry: :class:`ProviderRegistry`, :func:`create_registry`
    - Sources: :class:`ImportModuleSource`, :class:`StaticModuleSource`
    - Provider: :class:`OpenRouterProvider`
    - DTOs: :class:`CapabilityTag`, :class:`ModelDescriptor`, :class:`ProviderConfig`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`, :class:`RegistryError`
      and the taxonomy subclasses

Example:
    >>> registry = create_registry()
    >>> provider = registry.get_provider("https://github.com/MediaConduit/openrouter-provider")
    >>> provider.configure(api_key="sk-or-...")
    >>> provider.get_models_for_capability(CapabilityTag.TEXT_TO_TEXT)  # may be [] until discovery lands
"""

from typing import Mapping, Optional

from .base import (
    AuthError,
    CapabilityTag,
    DiscoveryError,
    ErrorCode,
    InvalidIdentifierError,
    MissingCredentialsError,
    ModelCatalog,
    ModelDescriptor,
    ModelNotFoundError,
    NotConfiguredError,
    ProviderConfig,
    ProviderError,
    ProviderLoadFailure,
    ProviderRegistry,
    RateLimitedError,
    RegistryError,
    SourceInvalidError,
    SourceUnreachableError,
    TransportError,
)
from .base.interfaces import ModuleSource
from .openrouter import OpenRouterProvider
from .sources import ImportModuleSource, StaticModuleSource

__version__ = "0.1.0"


def create_registry(
    source: Optional[ModuleSource] = None,
    *,
    aliases: Optional[Mapping[str, str]] = None,
    load_timeout: Optional[float] = None,
) -> ProviderRegistry:
    """Build a registry owned by the caller.

    Parameters:
        source: Module source to resolve identifiers; defaults to an
            :class:`ImportModuleSource` with the built-in alias table.
        aliases: Extra identifier -> import path entries for the default source.
        load_timeout: See :class:`ProviderRegistry`.
    """
    if source is None:
        source = ImportModuleSource(aliases)
    return ProviderRegistry(source, load_timeout=load_timeout)


__all__ = [
    "__version__",
    "create_registry",
    "ProviderRegistry",
    "ImportModuleSource",
    "StaticModuleSource",
    "OpenRouterProvider",
    "CapabilityTag",
    "ModelCatalog",
    "ModelDescriptor",
    "ProviderConfig",
    "ErrorCode",
    "ProviderError",
    "AuthError",
    "DiscoveryError",
    "MissingCredentialsError",
    "ModelNotFoundError",
    "NotConfiguredError",
    "RateLimitedError",
    "TransportError",
    "RegistryError",
    "InvalidIdentifierError",
    "ProviderLoadFailure",
    "SourceInvalidError",
    "SourceUnreachableError",
]
