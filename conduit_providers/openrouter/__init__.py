"""OpenRouter adapter: HTTP client, discovery normalization, provider and model handle."""

from .api_client import OpenRouterAPIClient
from .discovery import build_descriptors, display_name, normalize_descriptor, parse_price
from .provider import (
    OPTIMISTIC_MODEL_RESOLUTION,
    OpenRouterProvider,
    ProviderState,
    default_client_factory,
)
from .text_model import OpenRouterTextToTextModel

__all__ = [
    "OPTIMISTIC_MODEL_RESOLUTION",
    "OpenRouterAPIClient",
    "OpenRouterProvider",
    "OpenRouterTextToTextModel",
    "ProviderState",
    "build_descriptors",
    "default_client_factory",
    "display_name",
    "normalize_descriptor",
    "parse_price",
]
