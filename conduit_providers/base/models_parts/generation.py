"""
Generation result DTOs returned by upstream clients and model handles.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GenerationMetadata:
    """Metadata attached to one generation.

    Attributes:
        processing_time_ms: Wall-clock latency of the upstream call.
        model: Model id that served the request (as reported upstream when available).
        provider: Provider key.
        finish_reason: Upstream finish reason, if reported.
        usage: Token usage mapping, if reported.
        extra: Opaque provider-specific details.
    """

    processing_time_ms: float
    model: str
    provider: str
    finish_reason: Optional[str] = None
    usage: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GenerationResult:
    """Text produced by a model plus its metadata."""

    content: str
    metadata: GenerationMetadata


__all__ = ["GenerationMetadata", "GenerationResult"]
