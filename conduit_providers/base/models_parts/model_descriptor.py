"""
ModelDescriptor DTO for catalog entries.

Represents one model as normalized from an upstream listing. Descriptors are
immutable once built; a later discovery pass replaces an entry with the same
``id`` rather than patching it.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from ..capabilities import CapabilityTag

Number = Union[int, float]


@dataclass(frozen=True)
class ParameterSpec:
    """Bounds and default for one generation parameter.

    Attributes:
        type: Parameter type name (``"number"``, ``"integer"``...).
        minimum: Inclusive lower bound, if any.
        maximum: Inclusive upper bound, if any.
        default: Value used when the caller does not supply one.
    """

    type: str
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    default: Optional[Number] = None


@dataclass(frozen=True)
class ModelPricing:
    """Per-token pricing in ``currency`` units."""

    input_cost: float = 0.0
    output_cost: float = 0.0
    currency: str = "USD"

    @property
    def is_free(self) -> bool:
        return self.input_cost == 0 and self.output_cost == 0


@dataclass(frozen=True)
class ModelDescriptor:
    """A single model catalog entry.

    Attributes:
        id: Stable, provider-namespaced identifier (``vendor/model[:variant]``).
        name: Human-friendly display name.
        description: Free-form description.
        capabilities: Capability tags this model supports.
        parameters: Generation parameter schema keyed by parameter name.
        pricing: Optional pricing; ``None`` when the listing carried none.
        context_length: Optional maximum context window size.
    """

    id: str
    name: str
    description: str = ""
    capabilities: FrozenSet[CapabilityTag] = frozenset()
    parameters: Mapping[str, ParameterSpec] = field(default_factory=dict)
    pricing: Optional[ModelPricing] = None
    context_length: Optional[int] = None

    @property
    def is_free(self) -> bool:
        """True only when pricing is known and both costs are zero."""
        return self.pricing is not None and self.pricing.is_free

    def supports(self, capability: CapabilityTag) -> bool:
        return capability in self.capabilities

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        data = asdict(self)
        data["capabilities"] = sorted(c.value for c in self.capabilities)
        data["parameters"] = {k: asdict(v) for k, v in self.parameters.items()}
        return data


__all__ = ["ParameterSpec", "ModelPricing", "ModelDescriptor"]
