"""Unified error taxonomy public surface.

This module re-exports the implementations under
``conduit_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import RETRYABLE_CODES, TRANSPORT_CODES, ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.taxonomy import (
    AuthError,
    DiscoveryError,
    MissingCredentialsError,
    ModelNotFoundError,
    NotConfiguredError,
    RateLimitedError,
    TransportError,
)
from .errors_parts.registry_errors import (
    InvalidIdentifierError,
    ProviderLoadFailure,
    RegistryError,
    SourceInvalidError,
    SourceUnreachableError,
)
from .errors_parts.classification import (
    classify_exception,
    error_for_code,
    mentions_unknown_model,
    status_to_code,
)

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
    "status_to_code",
]
