"""MediaProvider Protocol (single-class module).

The host-facing surface every dynamically loaded provider must expose. The
registry checks constructed objects against it before caching them.
"""

from __future__ import annotations

from typing import Any, FrozenSet, List, Protocol, runtime_checkable

from ..capabilities import CapabilityTag
from ..models import ModelDescriptor, ServiceStatus


@runtime_checkable
class MediaProvider(Protocol):
    """Capability-indexed provider contract.

    Implementations own a model catalog populated in the background and hand
    out short-lived model handles. Capability queries are pure reads and
    must never raise because the catalog is empty.
    """

    id: str
    name: str
    capabilities: FrozenSet[CapabilityTag]

    def configure(self, config: Any) -> None:
        """Install credentials; returns before discovery completes."""
        ...

    def is_available(self) -> bool:
        """Live probe of the upstream API; never raises."""
        ...

    def get_models_for_capability(self, capability: Any) -> List[ModelDescriptor]:
        """Catalog entries supporting ``capability`` (possibly empty)."""
        ...

    def get_model(self, model_id: str) -> Any:
        """Return a model handle bound to ``model_id``."""
        ...

    def get_free_models(self) -> List[ModelDescriptor]:
        ...

    def is_model_free(self, model_id: str) -> bool:
        ...

    def get_service_status(self) -> ServiceStatus:
        ...
