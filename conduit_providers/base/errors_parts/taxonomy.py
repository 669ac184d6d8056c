"""
Concrete provider error subclasses.

Each subclass pins the failure category callers are expected to catch. The
normalized ``code`` is still carried on the instance so generic handlers can
keep switching on :class:`ErrorCode`.

Propagation policy
------------------
- ``MissingCredentialsError`` and ``NotConfiguredError`` are raised
  synchronously by the provider call that triggered them.
- ``ModelNotFoundError``, ``RateLimitedError``, ``AuthError`` and
  ``TransportError`` are raised by the upstream client when a request is
  actually issued (model ids are validated lazily).
- ``DiscoveryError`` never escapes the discovery task; it is logged and
  recorded on the provider's discovery report.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class MissingCredentialsError(ProviderError):
    """Raised by ``configure`` when no credential material is supplied."""

    def __init__(self, provider: str, message: str = "API key is required") -> None:
        super().__init__(code=ErrorCode.MISSING_CREDENTIALS, message=message, provider=provider)


class NotConfiguredError(ProviderError):
    """Raised when an operation needs a configured upstream client."""

    def __init__(self, provider: str, message: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.NOT_CONFIGURED,
            message=message or "Provider not configured - supply credentials via configure()",
            provider=provider,
        )


class ModelNotFoundError(ProviderError):
    """The upstream API rejected the requested model id."""


class RateLimitedError(ProviderError):
    """The upstream API throttled the request (HTTP 429)."""


class AuthError(ProviderError):
    """The upstream API rejected the credentials (HTTP 401/403)."""


class TransportError(ProviderError):
    """Network, timeout, or server-side failure talking to the upstream API."""


class DiscoveryError(ProviderError):
    """A model discovery pass was abandoned; the prior catalog stands."""

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DISCOVERY_FAILED,
            message=message,
            provider=provider,
            raw=raw,
        )


__all__ = [
    "MissingCredentialsError",
    "NotConfiguredError",
    "ModelNotFoundError",
    "RateLimitedError",
    "AuthError",
    "TransportError",
    "DiscoveryError",
]
