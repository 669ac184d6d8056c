"""Unified timeout configuration for registry and provider I/O.

Every network-bound step (discovery listing, availability probe, generation)
carries a bounded timeout so a hung upstream can never leave a provider stuck
mid-configuration. Values are centralized here; call sites must obtain them
through :func:`get_timeout_config` instead of hard-coding literals.

Environment variables (all optional, positive floats):
    CONDUIT_TIMEOUT_DISCOVERY_SECONDS
    CONDUIT_TIMEOUT_PROBE_SECONDS
    CONDUIT_TIMEOUT_HTTP_SECONDS
    CONDUIT_TIMEOUT_LOAD_SECONDS

Failure Modes
-------------
The timeouts are applied as ``httpx`` per-request timeouts; expiry surfaces as
``httpx.TimeoutException`` which the error classifier maps to
``ErrorCode.TIMEOUT``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

_ENV_KEYS = (
    "CONDUIT_TIMEOUT_DISCOVERY_SECONDS",
    "CONDUIT_TIMEOUT_PROBE_SECONDS",
    "CONDUIT_TIMEOUT_HTTP_SECONDS",
    "CONDUIT_TIMEOUT_LOAD_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        discovery_timeout_seconds: Bound on one model-listing request made by
            a discovery pass.
        probe_timeout_seconds: Bound on an availability probe.
        http_timeout_seconds: Baseline bound for generation requests.
        load_timeout_seconds: How long a registry waiter blocks on another
            caller's in-flight load before giving up (``None`` waits forever).
    """

    discovery_timeout_seconds: float = 30.0
    probe_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0
    load_timeout_seconds: float | None = None


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is recomputed when any of the timeout environment variables
    changed since the last call, so tests can adjust them with ``monkeypatch``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(k, "") for k in _ENV_KEYS)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        discovery_timeout_seconds=_parse_env_float(
            "CONDUIT_TIMEOUT_DISCOVERY_SECONDS", defaults.discovery_timeout_seconds
        ),
        probe_timeout_seconds=_parse_env_float(
            "CONDUIT_TIMEOUT_PROBE_SECONDS", defaults.probe_timeout_seconds
        ),
        http_timeout_seconds=_parse_env_float(
            "CONDUIT_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds
        ),
        load_timeout_seconds=_parse_env_float("CONDUIT_TIMEOUT_LOAD_SECONDS", None),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
