"""Provider identifier validation.

An identifier is an opaque locator string (a repository URL, an import path,
or a short alias). The registry uses the normalized form as its cache key, so
normalization must be stable: it strips surrounding whitespace and, for
URL-shaped identifiers, a trailing ``/`` and ``.git`` so every spelling of one
repository maps to one cached provider.

Validation happens before any load attempt and rejects:
- non-strings and strings that are empty after stripping;
- strings longer than ``MAX_IDENTIFIER_LENGTH``;
- strings containing whitespace or control characters;
- URL-shaped strings (containing ``://``) without a scheme, or without both
  a network location and a path.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

from .errors import InvalidIdentifierError

MAX_IDENTIFIER_LENGTH = 2048

_FORBIDDEN = re.compile(r"[\s\x00-\x1f\x7f]")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def normalize_identifier(identifier: Any) -> str:
    """Validate ``identifier`` and return its normalized (cache-key) form.

    Raises:
        InvalidIdentifierError: When the identifier is malformed.
    """
    if not isinstance(identifier, str):
        raise InvalidIdentifierError(None, f"Provider identifier must be a string, got {type(identifier).__name__}")
    key = identifier.strip()
    if not key:
        raise InvalidIdentifierError(identifier, "Provider identifier must not be empty")
    if len(key) > MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifierError(key[:64], f"Provider identifier exceeds {MAX_IDENTIFIER_LENGTH} characters")
    if _FORBIDDEN.search(key):
        raise InvalidIdentifierError(key, "Provider identifier must not contain whitespace or control characters")
    if "://" in key:
        _check_url(key)
        key = strip_source_suffix(key)
        _check_url(key)
    return key


def strip_source_suffix(identifier: str) -> str:
    """Drop a trailing ``/`` and ``.git`` so repository URL spellings share one key."""
    return identifier.rstrip("/").removesuffix(".git")


def _check_url(key: str) -> None:
    try:
        parts = urlsplit(key)
    except ValueError as exc:
        raise InvalidIdentifierError(key, f"Malformed provider URL: {exc}") from exc
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        raise InvalidIdentifierError(key, "Provider URL is missing a valid scheme")
    if parts.scheme != "file" and not parts.netloc:
        raise InvalidIdentifierError(key, "Provider URL is missing a host")
    if not parts.netloc and not parts.path.strip("/"):
        raise InvalidIdentifierError(key, "Provider URL has neither host nor path")


__all__ = ["MAX_IDENTIFIER_LENGTH", "normalize_identifier", "strip_source_suffix"]
