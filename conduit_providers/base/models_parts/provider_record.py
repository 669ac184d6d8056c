"""
ProviderRecord DTO held by the provider registry.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ProviderRecord:
    """One loaded provider.

    Created on the first successful load of ``identifier`` and never mutated;
    a re-load after eviction produces a new record.

    Attributes:
        identifier: Normalized provider identifier (the registry cache key).
        provider: The constructed provider instance.
        loaded_at: UTC time the load completed.
    """

    identifier: str
    provider: Any
    loaded_at: datetime


__all__ = ["ProviderRecord"]
