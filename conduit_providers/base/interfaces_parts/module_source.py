"""ModuleSource Protocol (single-class module).

A module source turns a provider identifier into a zero-argument provider
constructor. The registry depends only on this interface, never on a concrete
loading mechanism.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

ProviderConstructor = Callable[[], Any]


@runtime_checkable
class ModuleSource(Protocol):
    """Resolve provider identifiers to constructors."""

    def resolve(self, identifier: str) -> ProviderConstructor:
        """Return a zero-argument callable that builds the provider.

        Raises:
            SourceUnreachableError: The unit cannot be fetched or imported.
            SourceInvalidError: The unit does not expose a provider constructor.
        """
        ...
