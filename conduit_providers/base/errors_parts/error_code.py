"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration shared by the registry, provider and
upstream client layers. Values are lowercase snake_case and are considered a
stable public contract for logging and status reporting.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    # Upstream / transport
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"

    # Provider lifecycle
    MISSING_CREDENTIALS = "missing_credentials"
    NOT_CONFIGURED = "not_configured"
    DISCOVERY_FAILED = "discovery_failed"

    # Registry / loading
    INVALID_IDENTIFIER = "invalid_identifier"
    SOURCE_UNREACHABLE = "source_unreachable"
    SOURCE_INVALID = "source_invalid"
    LOAD_FAILED = "load_failed"

    INTERNAL = "internal"
    UNKNOWN = "unknown"


# Codes the retry policy and the HTTP client treat as worth another attempt.
RETRYABLE_CODES = (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT)

# Codes that describe a transport-level failure (as opposed to a semantic
# rejection by the upstream API).
TRANSPORT_CODES = (
    ErrorCode.TRANSIENT,
    ErrorCode.TIMEOUT,
    ErrorCode.SERVER_ERROR,
    ErrorCode.UNAVAILABLE,
    ErrorCode.UNKNOWN,
)


__all__ = ["ErrorCode", "RETRYABLE_CODES", "TRANSPORT_CODES"]
