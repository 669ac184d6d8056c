"""In-process module source backed by an explicit mapping.

Used for statically linked providers and in tests, where a fake constructor
stands in for a real provider module.
"""

from __future__ import annotations

import threading
from typing import Dict, Mapping, Optional

from ..base.errors import SourceInvalidError, SourceUnreachableError
from ..base.interfaces import ProviderConstructor


class StaticModuleSource:
    """Map identifiers to provider constructors held in memory."""

    def __init__(self, constructors: Optional[Mapping[str, ProviderConstructor]] = None) -> None:
        self._lock = threading.Lock()
        self._constructors: Dict[str, ProviderConstructor] = dict(constructors or {})

    def register(self, identifier: str, constructor: ProviderConstructor) -> None:
        if not callable(constructor):
            raise SourceInvalidError(identifier, f"Constructor for '{identifier}' is not callable")
        with self._lock:
            self._constructors[identifier] = constructor

    def unregister(self, identifier: str) -> None:
        with self._lock:
            self._constructors.pop(identifier, None)

    def resolve(self, identifier: str) -> ProviderConstructor:
        with self._lock:
            constructor = self._constructors.get(identifier)
        if constructor is None:
            raise SourceUnreachableError(identifier, f"No provider registered for '{identifier}'")
        return constructor


__all__ = ["StaticModuleSource"]
