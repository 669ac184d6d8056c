"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `conduit_providers.base.errors` for the stable surface.
"""

from .error_code import RETRYABLE_CODES, TRANSPORT_CODES, ErrorCode
from .provider_error import ProviderError
from .taxonomy import (
    AuthError,
    DiscoveryError,
    MissingCredentialsError,
    ModelNotFoundError,
    NotConfiguredError,
    RateLimitedError,
    TransportError,
)
from .registry_errors import (
    InvalidIdentifierError,
    ProviderLoadFailure,
    RegistryError,
    SourceInvalidError,
    SourceUnreachableError,
)
from .classification import classify_exception, error_for_code, mentions_unknown_model

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "TRANSPORT_CODES",
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
    "classify_exception",
    "error_for_code",
    "mentions_unknown_model",
]
