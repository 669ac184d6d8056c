"""Model DTOs split one concern per module; re-exported by ``base.models``."""

from .discovery_report import DiscoveryOutcome, DiscoveryReport
from .generation import GenerationMetadata, GenerationResult
from .model_descriptor import ModelDescriptor, ModelPricing, ParameterSpec
from .provider_config import ProviderConfig
from .provider_record import ProviderRecord
from .provider_type import ProviderType
from .service_status import ProviderHealth, ServiceStatus

__all__ = [
    "DiscoveryOutcome",
    "DiscoveryReport",
    "GenerationMetadata",
    "GenerationResult",
    "ModelDescriptor",
    "ModelPricing",
    "ParameterSpec",
    "ProviderConfig",
    "ProviderRecord",
    "ProviderType",
    "ProviderHealth",
    "ServiceStatus",
]
