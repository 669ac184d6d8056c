"""Public surface for provider DTOs.

Re-exports the implementations under ``conduit_providers.base.models_parts``.
"""

from .models_parts import (
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

__all__ = [
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
]
