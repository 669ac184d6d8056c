"""Structured logging context object.

This module defines :class:`LogContext`, a dataclass carrying the fields common
to registry and provider log events (provider name, model id, source
identifier, configuration generation). ``to_dict`` merges the ``extra``
mapping and prunes ``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    identifier: Optional[str] = None
    generation: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_model(self, model: Optional[str]) -> "LogContext":
        """Return a copy of this context bound to ``model``."""
        return replace(self, model=model, extra=dict(self.extra))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
