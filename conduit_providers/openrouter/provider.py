"""OpenRouter provider: configuration state, background discovery, model handles.

Summary:
- ``configure`` validates credentials, builds the API client and starts a
  discovery pass on a daemon thread. It returns as soon as the client is
  built; the catalog may still be empty (or hold the previous snapshot) when
  the call returns.
- Every configuration bumps a generation counter. A discovery pass carries the
  generation it started under and only commits if that generation is still
  current; otherwise its results are discarded as stale.
- Capability queries are pure catalog reads and never raise.
- Model ids are resolved optimistically (see ``OPTIMISTIC_MODEL_RESOLUTION``).

Failure modes:
- ``MissingCredentialsError`` from ``configure`` when no API key is supplied;
  the previous configuration (if any) stays active.
- ``NotConfiguredError`` from ``get_model`` before a successful ``configure``.
- Discovery failures are logged (``discovery.failed``) and recorded on the
  discovery report; they never propagate to callers.
- ``is_available`` never raises; the failure reason is kept for status output.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Union

from ..base.capabilities import CapabilityTag, coerce_capability
from ..base.catalog import ModelCatalog
from ..base.errors import (
    ErrorCode,
    MissingCredentialsError,
    ModelNotFoundError,
    NotConfiguredError,
    ProviderError,
    classify_exception,
)
from ..base.interfaces import UpstreamAPIClient
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import (
    DiscoveryOutcome,
    DiscoveryReport,
    ModelDescriptor,
    ProviderConfig,
    ProviderHealth,
    ProviderType,
    ServiceStatus,
)
from ..config import get_provider_config
from .api_client import OpenRouterAPIClient
from .discovery import build_descriptors
from .text_model import OpenRouterTextToTextModel

# Any model id yields a handle; unknown ids are rejected by the upstream API
# on first generation (ModelNotFoundError) instead of being checked against
# the local catalog.
OPTIMISTIC_MODEL_RESOLUTION = True

_NOT_CONFIGURED_MESSAGE = (
    "Provider not configured - set OPENROUTER_API_KEY environment variable or call configure()"
)
_UNHEALTHY_MESSAGE = "API connection failed"

# Discovery reports and completion events are kept for this many most recent
# generations.
RETAINED_GENERATIONS = 2

ClientFactory = Callable[[ProviderConfig], UpstreamAPIClient]
ConfigInput = Union[ProviderConfig, Mapping[str, Any], None]


class ProviderState(str, Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    CONFIGURED = "configured"


def default_client_factory(config: ProviderConfig) -> OpenRouterAPIClient:
    """Build the HTTP client for one configuration generation."""
    return OpenRouterAPIClient(
        config.secret(),
        base_url=config.base_url,
        http_referer=config.http_referer,
        x_title=config.x_title,
        headers=config.headers,
    )


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OpenRouterProvider:
    """Text-to-text provider backed by the OpenRouter unified LLM API.

    Parameters:
        client_factory: Builds an ``UpstreamAPIClient`` from a validated
            ``ProviderConfig``; defaults to ``OpenRouterAPIClient``.
        auto_configure: When True (default) and the configuration layer
            yields an API key (``OPENROUTER_API_KEY``, ``.env`` or the config
            file), the constructor configures the provider immediately.
        catalog: Optional pre-seeded catalog.

    Thread-safety:
        Configuration, the generation counter and the discovery
        check-then-commit run under one ``threading.RLock``. Catalog reads
        are lock-free snapshot reads.
    """

    id = "openrouter"
    name = "OpenRouter"
    type = ProviderType.REMOTE
    capabilities: FrozenSet[CapabilityTag] = frozenset({CapabilityTag.TEXT_TO_TEXT})

    def __init__(
        self,
        *,
        client_factory: Optional[ClientFactory] = None,
        auto_configure: bool = True,
        catalog: Optional[ModelCatalog] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._client_factory = client_factory or default_client_factory
        self._catalog = catalog if catalog is not None else ModelCatalog()
        self._config: Optional[ProviderConfig] = None
        self._client: Optional[UpstreamAPIClient] = None
        self._state = ProviderState.UNCONFIGURED
        self._generation = 0
        self._reports: Dict[int, DiscoveryReport] = {}
        self._done: Dict[int, threading.Event] = {}
        self._last_error: Optional[str] = None
        self._started = time.monotonic()
        self._logger = get_logger("openrouter.provider")

        if auto_configure:
            cfg = get_provider_config(self.id)
            if cfg.get("api_key"):
                self.configure(cfg)

    # ---- configuration ----
    def configure(self, config: ConfigInput = None, **overrides: Any) -> None:
        """Install credentials and start a background discovery pass.

        Accepts a ``ProviderConfig``, a mapping with the same keys, or keyword
        arguments (``configure(api_key="...")``); keywords win over ``config``.

        Raises:
            MissingCredentialsError: No non-blank API key was supplied.
            pydantic.ValidationError: The configuration values are malformed.
        """
        cfg = self._coerce_config(config, overrides)
        if not cfg.has_credentials():
            raise MissingCredentialsError(self.id, "OpenRouter API key is required")

        with self._lock:
            previous_state = self._state
            self._state = ProviderState.CONFIGURING
            try:
                client = self._client_factory(cfg)
            except Exception:
                self._state = previous_state
                raise
            self._generation += 1
            generation = self._generation
            self._config = cfg
            self._client = client
            self._state = ProviderState.CONFIGURED
            self._last_error = None
            self._reports[generation] = DiscoveryReport(
                generation=generation, outcome=DiscoveryOutcome.RUNNING, started_at=_now()
            )
            done = threading.Event()
            self._done[generation] = done
            self._prune_generations(generation)

        log_event(
            self._logger,
            "provider.configured",
            LogContext(provider=self.id, generation=generation),
            base_url=cfg.base_url,
        )
        thread = threading.Thread(
            target=self._run_discovery,
            args=(generation, client, done),
            name=f"{self.id}-discovery-{generation}",
            daemon=True,
        )
        thread.start()

    @staticmethod
    def _coerce_config(config: ConfigInput, overrides: Mapping[str, Any]) -> ProviderConfig:
        if isinstance(config, ProviderConfig) and not overrides:
            return config
        data: Dict[str, Any] = {}
        if isinstance(config, ProviderConfig):
            data.update(config.model_dump())
        elif config is not None:
            data.update(config)
        data.update(overrides)
        return ProviderConfig.model_validate(data)

    def _prune_generations(self, current: int) -> None:
        """Drop bookkeeping for generations outside the retention window (lock held)."""
        floor = current - RETAINED_GENERATIONS
        for table in (self._reports, self._done):
            for old in [g for g in table if g <= floor]:
                del table[old]

    def _store_report(self, report: DiscoveryReport) -> None:
        """Record ``report`` unless its generation was already pruned (lock held)."""
        if report.generation in self._reports:
            self._reports[report.generation] = report

    # ---- discovery ----
    def _run_discovery(self, generation: int, client: UpstreamAPIClient, done: threading.Event) -> None:
        try:
            self._discover(generation, client)
        finally:
            done.set()

    def _discover(self, generation: int, client: UpstreamAPIClient) -> DiscoveryReport:
        ctx = LogContext(provider=self.id, generation=generation)
        started = _now()
        log_event(self._logger, "discovery.start", ctx)
        try:
            descriptors = build_descriptors(client.list_models(), self.capabilities)
        except Exception as exc:  # noqa: BLE001 - discovery failures stop at the task boundary
            code = classify_exception(exc)
            report = DiscoveryReport(
                generation=generation,
                outcome=DiscoveryOutcome.FAILED,
                started_at=started,
                error=str(exc),
                finished_at=_now(),
            )
            with self._lock:
                self._store_report(report)
            log_event(
                self._logger,
                "discovery.failed",
                ctx,
                level=logging.WARNING,
                error=str(exc),
                error_code=code.value,
            )
            return report

        with self._lock:
            stale = generation != self._generation
            if not stale:
                self._catalog.replace_all(descriptors, generation=generation)
            report = DiscoveryReport(
                generation=generation,
                outcome=DiscoveryOutcome.STALE if stale else DiscoveryOutcome.COMMITTED,
                started_at=started,
                model_count=len(descriptors),
                finished_at=_now(),
            )
            self._store_report(report)
            current = self._generation

        if stale:
            log_event(self._logger, "discovery.stale", ctx, current_generation=current, model_count=len(descriptors))
        else:
            log_event(self._logger, "discovery.committed", ctx, model_count=len(descriptors))
        return report

    def discover_models(self) -> DiscoveryReport:
        """Run one discovery pass synchronously for the current generation.

        Raises:
            NotConfiguredError: No client has been configured.
        """
        with self._lock:
            client = self._client
            generation = self._generation
        if client is None:
            raise NotConfiguredError(self.id, _NOT_CONFIGURED_MESSAGE)
        return self._discover(generation, client)

    def wait_for_discovery(self, timeout: Optional[float] = None, generation: Optional[int] = None) -> bool:
        """Block until the background pass of ``generation`` (default: current) finishes.

        Returns False on timeout or when no pass was started for that generation.
        """
        with self._lock:
            done = self._done.get(self._generation if generation is None else generation)
        return done is not None and done.wait(timeout)

    def discovery_report(self, generation: int) -> Optional[DiscoveryReport]:
        with self._lock:
            return self._reports.get(generation)

    @property
    def last_discovery(self) -> Optional[DiscoveryReport]:
        """Report of the current generation's discovery (``None`` before configure)."""
        with self._lock:
            return self._reports.get(self._generation)

    # ---- availability ----
    def is_available(self) -> bool:
        """Live probe of the upstream API. Never raises."""
        with self._lock:
            client = self._client
            if client is None:
                self._last_error = "Provider not configured"
                return False
        try:
            ok = bool(client.test_connection())
        except Exception as exc:  # noqa: BLE001 - probes never raise
            log_event(
                self._logger,
                "probe.failed",
                LogContext(provider=self.id),
                level=logging.WARNING,
                error=str(exc),
                error_code=classify_exception(exc).value,
            )
            self._record_health_check(client, str(exc) or _UNHEALTHY_MESSAGE)
            return False
        self._record_health_check(client, None if ok else (getattr(client, "last_error", None) or _UNHEALTHY_MESSAGE))
        return ok

    def _record_health_check(self, client: UpstreamAPIClient, error: Optional[str]) -> None:
        """Store a health-check outcome unless a newer configuration replaced ``client``."""
        with self._lock:
            if self._client is client:
                self._last_error = error

    def get_service_status(self) -> ServiceStatus:
        healthy = self.is_available()
        return ServiceStatus(running=True, healthy=healthy, error=None if healthy else self.last_error)

    def get_health(self) -> ProviderHealth:
        healthy = self.is_available()
        return ProviderHealth(
            status="healthy" if healthy else "unhealthy",
            uptime_seconds=time.monotonic() - self._started,
            active_jobs=0,
            queued_jobs=0,
            last_error=None if healthy else self.last_error,
        )

    def start_service(self) -> bool:
        return True

    def stop_service(self) -> bool:
        return True

    # ---- catalog queries ----
    @property
    def models(self) -> List[ModelDescriptor]:
        return self._catalog.all()

    @property
    def catalog(self) -> ModelCatalog:
        return self._catalog

    def get_models_for_capability(self, capability: Any) -> List[ModelDescriptor]:
        """Catalog entries supporting ``capability``; ``[]`` for unknown or undeclared tags."""
        tag = coerce_capability(capability)
        if tag is None or tag not in self.capabilities:
            return []
        return self._catalog.by_capability(tag)

    def get_free_models(self) -> List[ModelDescriptor]:
        return self._catalog.free()

    def is_model_free(self, model_id: str) -> bool:
        """True only for catalog entries priced at zero; unknown ids are not free."""
        descriptor = self._catalog.by_id(model_id)
        return descriptor is not None and descriptor.is_free

    def get_supported_text_to_text_models(self) -> List[str]:
        return [d.id for d in self._catalog.by_capability(CapabilityTag.TEXT_TO_TEXT)]

    def supports_text_to_text_model(self, model_id: str) -> bool:
        if OPTIMISTIC_MODEL_RESOLUTION:
            return True
        return model_id in self._catalog

    # ---- model handles ----
    def get_model(self, model_id: str) -> OpenRouterTextToTextModel:
        """Return a handle for ``model_id`` without checking the catalog first.

        Raises:
            ValueError: ``model_id`` is blank.
            NotConfiguredError: ``configure`` has not succeeded yet.
        """
        return self.create_text_to_text_model(model_id)

    def create_text_to_text_model(self, model_id: str) -> OpenRouterTextToTextModel:
        if not isinstance(model_id, str) or not model_id.strip():
            raise ValueError("model_id must be a non-empty string")
        with self._lock:
            client = self._client
        if client is None:
            raise NotConfiguredError(self.id, _NOT_CONFIGURED_MESSAGE)
        model_id = model_id.strip()
        if not self.supports_text_to_text_model(model_id):
            raise ModelNotFoundError(
                code=ErrorCode.NOT_FOUND,
                message=f"Model '{model_id}' is not supported by OpenRouter provider",
                provider=self.id,
                model=model_id,
            )
        return OpenRouterTextToTextModel(client, model_id, self._catalog.by_id(model_id))

    def generate(self, *args: Any, **kwargs: Any) -> Any:
        """Direct generation is not offered; use ``get_model(id).transform(...)``."""
        raise ProviderError(
            code=ErrorCode.UNSUPPORTED,
            message="OpenRouterProvider should use model instances for generation, not direct generation",
            provider=self.id,
        )

    # ---- introspection ----
    @property
    def state(self) -> ProviderState:
        with self._lock:
            return self._state

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def config(self) -> Optional[ProviderConfig]:
        with self._lock:
            return self._config

    @property
    def last_error(self) -> Optional[str]:
        with self._lock:
            return self._last_error

    def describe(self) -> Dict[str, Any]:
        """Summary used by the CLI ``status`` command (no secrets)."""
        report = self.last_discovery
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "capabilities": sorted(c.value for c in self.capabilities),
            "state": self.state.value,
            "generation": self.generation,
            "model_count": len(self._catalog),
            "discovery": report.to_dict() if report else None,
        }

    def __repr__(self) -> str:
        return f"OpenRouterProvider(state={self.state.value}, generation={self.generation}, models={len(self._catalog)})"


__all__ = [
    "OPTIMISTIC_MODEL_RESOLUTION",
    "ProviderState",
    "OpenRouterProvider",
    "default_client_factory",
]
