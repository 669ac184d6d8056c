"""Shared HTTP client pool for upstream API clients.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so that re-configuring a provider (which rebuilds its API client
    object) does not also tear down and re-establish connection pools.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - The pooled client's default timeout is ``http_timeout_seconds`` from
      :func:`get_timeout_config`. Callers pass tighter per-request timeouts
      (discovery, probe) explicitly.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``.
    - Credentials are never stored on pooled clients; they travel as
      per-request headers, so one pooled client can serve successive
      configuration generations safely.
    - All clients are closed at interpreter exit via ``atexit``.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client so callers can use
            relative paths. ``None`` groups clients under a shared key.
        purpose: Short discriminator for separate pools (e.g.
            ``"openrouter.api"``). Keep stable to maximize reuse.

    Returns:
        A reusable ``httpx.Client`` instance.

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout_config().http_timeout_seconds
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            with contextlib.suppress(Exception):  # nosec B110 - best-effort shutdown
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
