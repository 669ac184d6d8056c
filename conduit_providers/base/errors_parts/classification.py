"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, ``httpx``
exception mapping, and message-based heuristics as a fallback. The
``error_for_code`` factory turns a classified failure into the matching
taxonomy subclass so callers can catch ``ModelNotFoundError`` and friends.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional, Type

import httpx

from .error_code import RETRYABLE_CODES, ErrorCode
from .provider_error import ProviderError
from .taxonomy import AuthError, ModelNotFoundError, RateLimitedError, TransportError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    402: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# Phrases OpenRouter (and OpenAI-style gateways) use when a model id is unknown.
_MODEL_NOT_FOUND_PHRASES = (
    "not a valid model",
    "invalid model",
    "unknown model",
    "model not found",
    "no endpoints found",
    "does not exist",
)


def status_to_code(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode` (5xx default to server error)."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if status >= 500:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def mentions_unknown_model(message: str) -> bool:
    """Return True when an upstream error message names an unknown model id."""
    msg = message.lower()
    return any(p in msg for p in _MODEL_NOT_FOUND_PHRASES)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for non-HTTP exceptions."""
    PATTERN_GROUPS = (
        (ErrorCode.RATE_LIMIT, ("rate limit",)),
        (ErrorCode.RATE_LIMIT, ("too many requests",)),
        (ErrorCode.TIMEOUT, ("timeout",)),
        (ErrorCode.TIMEOUT, ("timed out",)),
        (ErrorCode.AUTH, ("unauthorized",)),
        (ErrorCode.AUTH, ("forbidden",)),
        (ErrorCode.AUTH, ("api key",)),
        (ErrorCode.NOT_FOUND, ("not found",)),
        (ErrorCode.NOT_FOUND, ("does not exist",)),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.UNSUPPORTED, ("not supported",)),
        (ErrorCode.VALIDATION, ("invalid",)),
        (ErrorCode.VALIDATION, ("malformed",)),
        (ErrorCode.SERVER_ERROR, ("server error",)),
    )
    for code, patterns in PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (stdlib, asyncio, ``httpx``).
        3. ``httpx`` transport errors (connect/read/protocol).
        4. HTTP status mapping.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    status = _extract_status(exc)
    if status is not None:
        return status_to_code(status)
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


_CODE_TO_CLASS: Dict[ErrorCode, Type[ProviderError]] = {
    ErrorCode.NOT_FOUND: ModelNotFoundError,
    ErrorCode.RATE_LIMIT: RateLimitedError,
    ErrorCode.AUTH: AuthError,
    ErrorCode.TRANSIENT: TransportError,
    ErrorCode.TIMEOUT: TransportError,
    ErrorCode.SERVER_ERROR: TransportError,
    ErrorCode.UNAVAILABLE: TransportError,
    ErrorCode.UNKNOWN: TransportError,
}


def error_for_code(
    code: ErrorCode,
    message: str,
    *,
    provider: str,
    model: Optional[str] = None,
    status: Optional[int] = None,
    raw: Optional[BaseException] = None,
) -> ProviderError:
    """Build the taxonomy subclass matching ``code``.

    Codes without a dedicated subclass (e.g. ``VALIDATION``) produce a plain
    :class:`ProviderError`. ``retryable`` is derived from ``RETRYABLE_CODES``.
    """
    klass = _CODE_TO_CLASS.get(code, ProviderError)
    return klass(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        status=status,
        raw=raw,
    )


__all__ = [
    "classify_exception",
    "error_for_code",
    "mentions_unknown_model",
    "status_to_code",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
