"""Normalize OpenRouter model listings into catalog descriptors.

Purpose:
    Turn the raw ``GET /models`` entries into immutable ``ModelDescriptor``
    values. Parsing is all-or-nothing at the pass level: ``build_descriptors``
    either returns the complete list or raises ``DiscoveryError``, so the
    caller never commits a partial set.

Leniency rules:
    - A missing or malformed price field becomes ``0.0`` and a
      ``discovery.price_parse_warning`` event; it never aborts the pass.
    - An entry without a ``pricing`` object gets ``pricing=None`` and is
      therefore not reported as free.
    - Entries whose derived capabilities do not overlap the provider's declared
      set are skipped.

Hard failures (abort the pass):
    - An entry that is not a mapping, or has no usable string ``id``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from ..base.capabilities import CapabilityTag, capabilities_from_modalities
from ..base.errors import DiscoveryError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ModelDescriptor, ModelPricing, ParameterSpec
from ..config.defaults import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MAX_TOKENS_CEILING,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    OPENROUTER_PRICING_CURRENCY,
)
from .api_client import PROVIDER

_logger = get_logger("openrouter.discovery")


def parse_price(value: Any, *, model_id: str = "", field: str = "") -> float:
    """Parse a per-token price such as ``"$0.0001"``, ``"0.0001"`` or ``0.0001``.

    Missing or malformed values yield ``0.0`` and a warning event.
    """
    if isinstance(value, bool):
        value = None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip().replace("$", "").replace(",", "")
        try:
            return float(text)
        except ValueError:
            pass
    log_event(
        _logger,
        "discovery.price_parse_warning",
        LogContext(provider=PROVIDER, model=model_id or None),
        level=logging.WARNING,
        field=field or None,
        value=repr(value),
    )
    return 0.0


def parse_pricing(raw: Any, model_id: str) -> Optional[ModelPricing]:
    """Build ``ModelPricing`` from a ``{"prompt": ..., "completion": ...}`` mapping."""
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        log_event(
            _logger,
            "discovery.price_parse_warning",
            LogContext(provider=PROVIDER, model=model_id),
            level=logging.WARNING,
            field="pricing",
            value=repr(raw),
        )
        return ModelPricing(currency=OPENROUTER_PRICING_CURRENCY)
    return ModelPricing(
        input_cost=parse_price(raw.get("prompt"), model_id=model_id, field="prompt"),
        output_cost=parse_price(raw.get("completion"), model_id=model_id, field="completion"),
        currency=OPENROUTER_PRICING_CURRENCY,
    )


def display_name(model_id: str) -> str:
    """Derive ``"Vendor model"`` from ``"vendor/model"``; other ids pass through."""
    parts = model_id.split("/")
    if len(parts) == 2 and all(parts):
        vendor, model = parts
        return f"{vendor[:1].upper()}{vendor[1:]} {model}"
    return model_id


def default_parameters(max_completion_tokens: Any = None) -> Dict[str, ParameterSpec]:
    """Generation parameter schema applied to every discovered model."""
    ceiling = DEFAULT_MAX_TOKENS_CEILING
    if isinstance(max_completion_tokens, int) and not isinstance(max_completion_tokens, bool) and max_completion_tokens > 0:
        ceiling = max_completion_tokens
    return {
        "temperature": ParameterSpec(type="number", minimum=0, maximum=2, default=DEFAULT_TEMPERATURE),
        "max_tokens": ParameterSpec(
            type="integer", minimum=1, maximum=ceiling, default=min(DEFAULT_MAX_TOKENS, ceiling)
        ),
        "top_p": ParameterSpec(type="number", minimum=0, maximum=1, default=DEFAULT_TOP_P),
    }


def _capabilities(raw: Mapping[str, Any]) -> FrozenSet[CapabilityTag]:
    arch = raw.get("architecture")
    if isinstance(arch, Mapping):
        inputs = arch.get("input_modalities")
        outputs = arch.get("output_modalities")
        if isinstance(inputs, list) and isinstance(outputs, list):
            return capabilities_from_modalities(inputs, outputs)
    return frozenset({CapabilityTag.TEXT_TO_TEXT})


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def normalize_descriptor(
    raw: Any, supported: Iterable[CapabilityTag] = (CapabilityTag.TEXT_TO_TEXT,)
) -> Optional[ModelDescriptor]:
    """Normalize one raw listing entry.

    Returns ``None`` when the entry supports none of the ``supported``
    capabilities.

    Raises:
        DiscoveryError: The entry is not a mapping or has no usable id.
    """
    if not isinstance(raw, Mapping):
        raise DiscoveryError(PROVIDER, f"Model entry is not an object: {type(raw).__name__}")
    model_id = raw.get("id")
    if not isinstance(model_id, str) or not model_id.strip():
        raise DiscoveryError(PROVIDER, f"Model entry has no usable id: {raw.get('id')!r}")
    model_id = model_id.strip()

    capabilities = _capabilities(raw) & frozenset(supported)
    if not capabilities:
        log_event(
            _logger,
            "discovery.skipped",
            LogContext(provider=PROVIDER, model=model_id),
            level=logging.DEBUG,
            reason="no supported capability",
        )
        return None

    name = raw.get("name")
    description = raw.get("description")
    top_provider = raw.get("top_provider")
    max_completion = top_provider.get("max_completion_tokens") if isinstance(top_provider, Mapping) else None
    context_length = _optional_int(raw.get("context_length"))
    if context_length is None and isinstance(top_provider, Mapping):
        context_length = _optional_int(top_provider.get("context_length"))

    return ModelDescriptor(
        id=model_id,
        name=name.strip() if isinstance(name, str) and name.strip() else display_name(model_id),
        description=description if isinstance(description, str) and description else f"OpenRouter model: {model_id}",
        capabilities=capabilities,
        parameters=default_parameters(max_completion),
        pricing=parse_pricing(raw.get("pricing"), model_id),
        context_length=context_length,
    )


def build_descriptors(
    items: Iterable[Any], supported: Iterable[CapabilityTag] = (CapabilityTag.TEXT_TO_TEXT,)
) -> List[ModelDescriptor]:
    """Normalize a whole listing; raises ``DiscoveryError`` on the first bad entry."""
    supported = frozenset(supported)
    out: List[ModelDescriptor] = []
    for raw in items:
        descriptor = normalize_descriptor(raw, supported)
        if descriptor is not None:
            out.append(descriptor)
    return out


__all__ = [
    "parse_price",
    "parse_pricing",
    "display_name",
    "default_parameters",
    "normalize_descriptor",
    "build_descriptors",
]
