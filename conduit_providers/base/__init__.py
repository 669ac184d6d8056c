"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, the model catalog and the provider
registry for use by concrete adapters and host applications.

Layout:
- Interfaces: provider, module-source and upstream-client boundaries
- Models (DTOs): immutable descriptors, configuration and status objects
- Catalog: capability-indexed snapshot of discovered models
- Registry: identifier -> provider instance, with per-identifier load dedup
"""

from .capabilities import CapabilityTag, capabilities_from_modalities, coerce_capability
from .catalog import ModelCatalog
from .errors import (
    AuthError,
    DiscoveryError,
    ErrorCode,
    InvalidIdentifierError,
    MissingCredentialsError,
    ModelNotFoundError,
    NotConfiguredError,
    ProviderError,
    ProviderLoadFailure,
    RateLimitedError,
    RegistryError,
    SourceInvalidError,
    SourceUnreachableError,
    TransportError,
)
from .identifiers import MAX_IDENTIFIER_LENGTH, normalize_identifier
from .interfaces import MediaProvider, ModuleSource, ProviderConstructor, UpstreamAPIClient
from .models import (
    DiscoveryOutcome,
    DiscoveryReport,
    GenerationMetadata,
    GenerationResult,
    ModelDescriptor,
    ModelPricing,
    ParameterSpec,
    ProviderConfig,
    ProviderHealth,
    ProviderRecord,
    ProviderType,
    ServiceStatus,
)
from .registry import ProviderRegistry
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Capabilities
    "CapabilityTag",
    "capabilities_from_modalities",
    "coerce_capability",
    # Models
    "DiscoveryOutcome",
    "DiscoveryReport",
    "GenerationMetadata",
    "GenerationResult",
    "ModelDescriptor",
    "ModelPricing",
    "ParameterSpec",
    "ProviderConfig",
    "ProviderHealth",
    "ProviderRecord",
    "ProviderType",
    "ServiceStatus",
    # Interfaces
    "MediaProvider",
    "ModuleSource",
    "ProviderConstructor",
    "UpstreamAPIClient",
    # Errors
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
    # Catalog / registry
    "ModelCatalog",
    "ProviderRegistry",
    "MAX_IDENTIFIER_LENGTH",
    "normalize_identifier",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
