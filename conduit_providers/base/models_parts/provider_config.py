"""Typed configuration object supplied to ``Provider.configure``.

Purpose
-------
Carry the credential material and optional endpoint/client-identification
overrides for one configuration generation of a provider.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation; ``SecretStr`` keeps the API key
  out of ``repr`` and log output.

Notes
-----
- The model is frozen: a provider's configuration is immutable once
  ``configure`` succeeds. Re-configuring supplies a new instance.
- Presence of credentials is checked by the provider, not here, so that the
  failure surfaces as ``MissingCredentialsError`` rather than a validation
  error.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class ProviderConfig(BaseModel):
    """Credentials and endpoint overrides for a provider.

    Attributes
    ----------
    api_key:
        Opaque secret used to authenticate against the upstream API.
    base_url:
        Optional override of the upstream API base URL.
    http_referer:
        Optional client identification sent as ``HTTP-Referer``.
    x_title:
        Optional client identification sent as ``X-Title``.
    headers:
        Extra static HTTP headers added to every request.
    extra:
        Free-form provider-specific settings.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    api_key: Optional[SecretStr] = None
    base_url: Optional[str] = None
    http_referer: Optional[str] = None
    x_title: Optional[str] = None
    headers: Mapping[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None

    def has_credentials(self) -> bool:
        """Return True when a non-blank API key is present."""
        return self.api_key is not None and bool(self.api_key.get_secret_value().strip())

    def secret(self) -> str:
        """Return the raw API key (empty string when absent)."""
        return self.api_key.get_secret_value().strip() if self.api_key is not None else ""


__all__ = ["ProviderConfig"]
