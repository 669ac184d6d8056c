"""Capability-indexed model catalog owned by one provider instance.

Purpose
-------
Hold the snapshot of models produced by the last successful discovery pass
and answer point and capability lookups against it.

Invariants
----------
- The catalog is either empty (no successful discovery yet) or exactly the
  snapshot last committed. Writers build a complete new mapping and swap it
  in under the lock (copy-on-write), so a reader holding the previous mapping
  never observes a mix of old and new entries.
- ``by_capability`` is computed at query time from the current snapshot and
  returns only entries whose capability set contains the tag.
- Entries are immutable ``ModelDescriptor`` values; an entry with an existing
  id is replaced, never patched.

Thread-safety
-------------
All mutation goes through ``replace_all``/``upsert_all``/``clear`` under a
``threading.Lock``. Reads grab the current mapping reference under the same
lock and then work lock-free on that immutable snapshot.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from .capabilities import CapabilityTag
from .models import ModelDescriptor


class ModelCatalog:
    """Mapping of model id to :class:`ModelDescriptor` with atomic bulk writes."""

    def __init__(self, descriptors: Iterable[ModelDescriptor] = ()) -> None:
        self._lock = threading.Lock()
        self._entries: Mapping[str, ModelDescriptor] = MappingProxyType(
            {d.id: d for d in descriptors}
        )
        self._generation: Optional[int] = None
        self._updated_at: Optional[datetime] = None

    # ---- writes ----
    def replace_all(self, descriptors: Iterable[ModelDescriptor], generation: Optional[int] = None) -> int:
        """Atomically replace the whole snapshot.

        The new mapping is fully built before the swap; if iterating
        ``descriptors`` raises, the current snapshot is untouched.

        Parameters:
            descriptors: Complete set of entries for the new snapshot. Later
                duplicates of an id win.
            generation: Configuration generation that produced the snapshot.

        Returns:
            Number of entries in the new snapshot.
        """
        fresh = MappingProxyType({d.id: d for d in descriptors})
        with self._lock:
            self._entries = fresh
            self._generation = generation
            self._updated_at = datetime.now(timezone.utc)
        return len(fresh)

    def upsert_all(self, descriptors: Iterable[ModelDescriptor]) -> int:
        """Atomically insert or replace the given entries, keeping the rest.

        Returns:
            Number of entries in the resulting snapshot.
        """
        incoming = {d.id: d for d in descriptors}
        with self._lock:
            merged = dict(self._entries)
            merged.update(incoming)
            self._entries = MappingProxyType(merged)
            self._updated_at = datetime.now(timezone.utc)
            return len(merged)

    def clear(self) -> None:
        with self._lock:
            self._entries = MappingProxyType({})
            self._generation = None
            self._updated_at = None

    # ---- reads ----
    def _snapshot(self) -> Mapping[str, ModelDescriptor]:
        with self._lock:
            return self._entries

    def by_id(self, model_id: str) -> Optional[ModelDescriptor]:
        return self._snapshot().get(model_id)

    def by_capability(self, capability: CapabilityTag) -> List[ModelDescriptor]:
        """Entries whose capability set contains ``capability`` (insertion order)."""
        return [d for d in self._snapshot().values() if capability in d.capabilities]

    def all(self) -> List[ModelDescriptor]:
        return list(self._snapshot().values())

    def ids(self) -> List[str]:
        return list(self._snapshot().keys())

    def free(self) -> List[ModelDescriptor]:
        """Entries with known pricing whose input and output costs are both zero."""
        return [d for d in self._snapshot().values() if d.is_free]

    @property
    def generation(self) -> Optional[int]:
        """Configuration generation of the current snapshot (``None`` if seeded or empty)."""
        with self._lock:
            return self._generation

    @property
    def updated_at(self) -> Optional[datetime]:
        with self._lock:
            return self._updated_at

    def __len__(self) -> int:
        return len(self._snapshot())

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._snapshot()

    def __iter__(self) -> Iterator[ModelDescriptor]:
        return iter(list(self._snapshot().values()))

    def as_dict(self) -> Dict[str, ModelDescriptor]:
        return dict(self._snapshot())


__all__ = ["ModelCatalog"]
