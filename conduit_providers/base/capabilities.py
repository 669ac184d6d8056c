"""Capability enumeration.

A capability names a kind of transformation a provider or model supports.
The set is closed: providers declare the subset they support at class level
and that subset never changes at runtime. Discovered models are reconciled
against it (see ``openrouter.discovery``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional


class CapabilityTag(str, Enum):
    """Closed set of transformation capabilities."""

    TEXT_TO_TEXT = "text-to-text"
    TEXT_TO_IMAGE = "text-to-image"
    TEXT_TO_AUDIO = "text-to-audio"
    TEXT_TO_VIDEO = "text-to-video"
    AUDIO_TO_TEXT = "audio-to-text"
    IMAGE_TO_TEXT = "image-to-text"


def coerce_capability(value: Any) -> Optional[CapabilityTag]:
    """Return the :class:`CapabilityTag` for ``value`` or ``None`` if unknown.

    Accepts enum members and their string values (case-insensitive,
    ``_`` and ``-`` interchangeable, so ``"TEXT_TO_TEXT"`` works too).
    """
    if isinstance(value, CapabilityTag):
        return value
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower().replace("_", "-")
    try:
        return CapabilityTag(normalized)
    except ValueError:
        return None


# (input modality, output modality) -> capability
_MODALITY_MAP = {
    ("text", "text"): CapabilityTag.TEXT_TO_TEXT,
    ("text", "image"): CapabilityTag.TEXT_TO_IMAGE,
    ("text", "audio"): CapabilityTag.TEXT_TO_AUDIO,
    ("text", "video"): CapabilityTag.TEXT_TO_VIDEO,
    ("audio", "text"): CapabilityTag.AUDIO_TO_TEXT,
    ("image", "text"): CapabilityTag.IMAGE_TO_TEXT,
}


def capabilities_from_modalities(
    inputs: Iterable[Any], outputs: Iterable[Any]
) -> FrozenSet[CapabilityTag]:
    """Derive capabilities from input/output modality lists.

    Every (input, output) pair with a known mapping contributes one tag.
    Modality names are lower-cased; unknown modalities (``file``...) are ignored.
    """
    ins = {str(m).lower() for m in inputs}
    outs = {str(m).lower() for m in outputs}
    return frozenset(cap for (i, o), cap in _MODALITY_MAP.items() if i in ins and o in outs)


__all__ = ["CapabilityTag", "coerce_capability", "capabilities_from_modalities"]
