"""
Service status and health DTOs reported by providers.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional


@dataclass(frozen=True)
class ServiceStatus:
    """Result of ``Provider.get_service_status``.

    Remote API providers are always ``running``; ``healthy`` reflects a live
    probe and ``error`` carries the probe's failure reason.
    """

    running: bool
    healthy: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProviderHealth:
    """Result of ``Provider.get_health``."""

    status: Literal["healthy", "unhealthy"]
    uptime_seconds: float
    active_jobs: int = 0
    queued_jobs: int = 0
    last_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ServiceStatus", "ProviderHealth"]
