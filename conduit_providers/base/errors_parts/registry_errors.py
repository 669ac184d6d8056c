"""
Registry and module-source error types.

These errors describe failures to turn a provider identifier into a running
provider instance. They are deliberately separate from :class:`ProviderError`
because no provider exists yet when they are raised.

Failure modes
-------------
- ``InvalidIdentifierError``: the identifier is malformed; raised before any
  load attempt.
- ``SourceUnreachableError``: the module source could not fetch or import the
  unit named by the identifier.
- ``SourceInvalidError``: the unit was found but does not expose a usable
  provider constructor, or constructed something that is not a provider.
- ``ProviderLoadFailure``: the registry-level wrapper carrying the identifier
  and underlying cause. Never cached; the next lookup retries.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode


class RegistryError(Exception):
    """Base class for provider registry and loading failures."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, identifier: Optional[str], message: str) -> None:
        super().__init__(message)
        self.identifier = identifier
        self.message = message


class InvalidIdentifierError(RegistryError, ValueError):
    """Raised when a provider identifier fails validation."""

    code = ErrorCode.INVALID_IDENTIFIER


class SourceUnreachableError(RegistryError):
    """Raised when a module source cannot fetch the requested unit."""

    code = ErrorCode.SOURCE_UNREACHABLE


class SourceInvalidError(RegistryError):
    """Raised when a fetched unit does not expose the expected provider shape."""

    code = ErrorCode.SOURCE_INVALID


class ProviderLoadFailure(RegistryError):
    """Loading or constructing a provider failed.

    Attributes:
        identifier: The normalized identifier that was being loaded.
        cause: The underlying exception (also chained as ``__cause__``).
    """

    code = ErrorCode.LOAD_FAILED

    def __init__(self, identifier: str, cause: BaseException) -> None:
        super().__init__(identifier, f"Failed to load provider '{identifier}': {cause}")
        self.cause = cause

    @property
    def cause_code(self) -> ErrorCode:
        """Normalized code of the underlying cause (``LOAD_FAILED`` when opaque)."""
        code = getattr(self.cause, "code", None)
        return code if isinstance(code, ErrorCode) else ErrorCode.LOAD_FAILED


__all__ = [
    "RegistryError",
    "InvalidIdentifierError",
    "SourceUnreachableError",
    "SourceInvalidError",
    "ProviderLoadFailure",
]
