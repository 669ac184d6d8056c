"""Test doubles implementing the package protocols.

Exports:
    - FakeAPIClient: scripted ``UpstreamAPIClient`` with optional gating.
    - CountingSource: ``ModuleSource`` that counts resolutions.
    - descriptor(): shorthand ``ModelDescriptor`` builder.
"""
from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional

from conduit_providers.base.capabilities import CapabilityTag
from conduit_providers.base.errors import ErrorCode, ModelNotFoundError
from conduit_providers.base.models import GenerationMetadata, GenerationResult, ModelDescriptor, ModelPricing


def descriptor(model_id: str, *, input_cost: Optional[float] = 0.0, output_cost: float = 0.0) -> ModelDescriptor:
    pricing = None if input_cost is None else ModelPricing(input_cost=input_cost, output_cost=output_cost)
    return ModelDescriptor(
        id=model_id,
        name=model_id,
        capabilities=frozenset({CapabilityTag.TEXT_TO_TEXT}),
        pricing=pricing,
    )


class FakeAPIClient:
    """Scripted upstream client.

    ``gate`` (when set) blocks ``list_models`` until released so tests can
    control when a discovery pass finishes.
    """

    def __init__(
        self,
        models: Optional[List[Any]] = None,
        *,
        ok: bool = True,
        list_error: Optional[BaseException] = None,
        gate: Optional[threading.Event] = None,
        known_models: Optional[List[str]] = None,
        probe_error: Optional[BaseException] = None,
    ) -> None:
        self.models = list(models or [])
        self.ok = ok
        self.list_error = list_error
        self.gate = gate
        self.known_models = known_models
        self.probe_error = probe_error
        self.list_calls = 0
        self.generate_calls: List[Dict[str, Any]] = []
        self.last_error: Optional[str] = None if ok else "401 unauthorized"

    def test_connection(self) -> bool:
        if self.probe_error is not None:
            raise self.probe_error
        return self.ok

    def list_models(self) -> List[Any]:
        self.list_calls += 1
        if self.gate is not None:
            self.gate.wait(5)
        if self.list_error is not None:
            raise self.list_error
        return list(self.models)

    def generate(self, model_id: str, prompt: str, **options: Any) -> GenerationResult:
        self.generate_calls.append({"model_id": model_id, "prompt": prompt, "options": options})
        known = self.known_models if self.known_models is not None else [m["id"] for m in self.models if isinstance(m, dict)]
        if model_id not in known:
            raise ModelNotFoundError(
                code=ErrorCode.NOT_FOUND,
                message=f"{model_id} is not a valid model ID",
                provider="openrouter",
                model=model_id,
                status=400,
            )
        return GenerationResult(
            content=f"echo: {prompt}",
            metadata=GenerationMetadata(processing_time_ms=1.0, model=model_id, provider="openrouter"),
        )


class CountingSource:
    """ModuleSource returning ``constructor`` and counting resolutions.

    ``delay_event`` (when set) makes ``resolve`` block until released so many
    callers can pile up on the same in-flight load.
    """

    def __init__(
        self,
        constructor: Callable[[], Any],
        *,
        delay_event: Optional[threading.Event] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self.constructor = constructor
        self.delay_event = delay_event
        self.error = error
        self.resolve_calls = 0
        self.construct_calls = 0
        self._lock = threading.Lock()

    def resolve(self, identifier: str) -> Callable[[], Any]:
        with self._lock:
            self.resolve_calls += 1
        if self.delay_event is not None:
            self.delay_event.wait(5)
        if self.error is not None:
            raise self.error

        def _construct() -> Any:
            with self._lock:
                self.construct_calls += 1
            return self.constructor()

        return _construct
