"""Provider registry: identifier -> live provider instance.

Purpose
-------
Resolve a provider identifier through a :class:`ModuleSource`, construct the
provider, and cache it for the lifetime of the registry (or until evicted).

Design notes
------------
- The registry is an explicitly constructed object owned by the host's
  composition root; there is no module-level singleton.
- At most one load-and-construct sequence runs per identifier. The first
  caller on a cache miss becomes the *leader* and registers a
  ``concurrent.futures.Future`` in the pending table; concurrent callers for
  the same identifier wait on that future and observe the leader's single
  outcome (the same instance, or the same ``ProviderLoadFailure``). The
  pending entry is removed on completion whether the load succeeded or not.
- Failures are never cached: after a failed load the next call starts a
  fresh load.
- A record is inserted only after construction succeeded and the result
  passed the provider-shape check, so callers never see a partially
  constructed provider.

Failure modes
-------------
- ``InvalidIdentifierError`` for malformed identifiers, before any load.
- ``ProviderLoadFailure`` wrapping ``SourceUnreachableError``,
  ``SourceInvalidError`` or any exception raised by the constructor.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .errors import ProviderLoadFailure, RegistryError, SourceInvalidError
from .identifiers import normalize_identifier
from .interfaces import MediaProvider, ModuleSource
from .logging import LogContext, get_logger, log_event
from .models import ProviderRecord
from .timeouts import get_timeout_config


class ProviderRegistry:
    """Cache of loaded providers keyed by normalized identifier.

    Parameters:
        source: Module source used to resolve identifiers on a cache miss.
        load_timeout: Seconds a waiting caller blocks on another caller's
            in-flight load before failing; defaults to
            ``TimeoutConfig.load_timeout_seconds`` (``None`` = wait forever).
    """

    def __init__(self, source: ModuleSource, *, load_timeout: Optional[float] = None) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._records: Dict[str, ProviderRecord] = {}
        self._pending: Dict[str, Future] = {}
        self._load_timeout = load_timeout if load_timeout is not None else get_timeout_config().load_timeout_seconds
        self._logger = get_logger("registry")

    @property
    def source(self) -> ModuleSource:
        return self._source

    def get_provider(self, identifier: str) -> Any:
        """Return the provider for ``identifier``, loading it on first use.

        Raises:
            InvalidIdentifierError: ``identifier`` is malformed.
            ProviderLoadFailure: Resolution or construction failed (not cached).
        """
        key = normalize_identifier(identifier)
        with self._lock:
            record = self._records.get(key)
            if record is not None:
                return record.provider
            pending = self._pending.get(key)
            leader = pending is None
            if leader:
                pending = Future()
                pending.set_running_or_notify_cancel()
                self._pending[key] = pending

        if not leader:
            return self._await_pending(key, pending)
        return self._lead_load(key, pending)

    def _await_pending(self, key: str, pending: Future) -> Any:
        try:
            return pending.result(timeout=self._load_timeout)
        except FutureTimeoutError as exc:
            raise ProviderLoadFailure(
                key, TimeoutError(f"timed out after {self._load_timeout}s waiting for in-flight load")
            ) from exc

    def _lead_load(self, key: str, pending: Future) -> Any:
        ctx = LogContext(identifier=key)
        log_event(self._logger, "registry.load.start", ctx)
        t0 = time.perf_counter()
        try:
            provider = self._load(key)
        except Exception as exc:
            failure = exc if isinstance(exc, ProviderLoadFailure) else ProviderLoadFailure(key, exc)
            self._fail_pending(key, pending, failure)
            log_event(
                self._logger,
                "registry.load.error",
                ctx,
                error=str(failure.cause),
                error_code=failure.cause_code.value,
            )
            if failure is exc:
                raise
            raise failure from exc
        except BaseException as exc:
            # KeyboardInterrupt and friends: release waiters, then propagate as-is.
            self._fail_pending(key, pending, ProviderLoadFailure(key, exc))
            raise

        record = ProviderRecord(identifier=key, provider=provider, loaded_at=datetime.now(timezone.utc))
        with self._lock:
            self._records[key] = record
            self._pending.pop(key, None)
        pending.set_result(provider)
        log_event(
            self._logger,
            "registry.load.end",
            ctx,
            provider=getattr(provider, "id", None),
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return provider

    def _fail_pending(self, key: str, pending: Future, failure: ProviderLoadFailure) -> None:
        with self._lock:
            self._pending.pop(key, None)
        pending.set_exception(failure)

    def _load(self, key: str) -> Any:
        """Resolve and construct; raises the underlying error on failure."""
        constructor = self._source.resolve(key)
        if not callable(constructor):
            raise SourceInvalidError(key, f"Source returned a non-callable provider constructor: {constructor!r}")
        provider = constructor()
        if not isinstance(provider, MediaProvider):
            raise SourceInvalidError(
                key, f"Constructed object of type {type(provider).__name__} does not implement the provider interface"
            )
        return provider

    # ---- lifecycle ----
    def get_record(self, identifier: str) -> Optional[ProviderRecord]:
        key = normalize_identifier(identifier)
        with self._lock:
            return self._records.get(key)

    def records(self) -> List[ProviderRecord]:
        with self._lock:
            return list(self._records.values())

    def identifiers(self) -> List[str]:
        with self._lock:
            return list(self._records.keys())

    def evict(self, identifier: str) -> bool:
        """Drop the cached provider for ``identifier``; returns True if one was cached.

        An in-flight load is not affected; it will insert its record on completion.
        """
        key = normalize_identifier(identifier)
        with self._lock:
            removed = self._records.pop(key, None)
        if removed is not None:
            log_event(self._logger, "registry.evict", LogContext(identifier=key))
        return removed is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __contains__(self, identifier: object) -> bool:
        try:
            key = normalize_identifier(identifier)
        except RegistryError:
            return False
        with self._lock:
            return key in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["ProviderRegistry"]
