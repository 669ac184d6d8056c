"""CLI action handlers.

Purpose
-------
Subcommand handlers for the conduit-providers CLI. Each handler receives the
parsed ``argparse.Namespace`` and an already-loaded provider, writes one JSON
document to stdout and returns a process exit code.

Fallback & Error Semantics
--------------------------
- Load and configuration failures are reported as JSON on stderr with a
  non-zero return code.
- Discovery is awaited for at most ``--wait`` seconds; an empty catalog after
  that is reported, not treated as an error.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from ..base.errors import ProviderError, RegistryError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ModelDescriptor

_logger = get_logger("cli")


def emit(payload: Any, stream: Optional[TextIO] = None) -> None:
    """Write ``payload`` as indented JSON to ``stream`` (stdout by default)."""
    out = stream if stream is not None else sys.stdout
    out.write(json.dumps(payload, indent=2, ensure_ascii=False, default=str) + "\n")


def emit_error(error: BaseException, *, code: Optional[str] = None) -> None:
    body: Dict[str, Any] = {"error": str(error), "type": type(error).__name__}
    err_code = code or getattr(getattr(error, "code", None), "value", None)
    if err_code:
        body["code"] = err_code
    emit(body, sys.stderr)


def _limit(items: List[ModelDescriptor], limit: Optional[int]) -> List[ModelDescriptor]:
    return items[:limit] if limit is not None and limit >= 0 else items


def load_provider(registry: Any, args: argparse.Namespace) -> Any:
    """Load ``--provider`` through ``registry`` and apply ``--api-key`` if given.

    Waits up to ``--wait`` seconds for discovery when the provider has been
    configured (explicitly or from the environment).
    """
    provider = registry.get_provider(args.provider)
    if args.api_key:
        provider.configure(api_key=args.api_key)
    wait = getattr(provider, "wait_for_discovery", None)
    if callable(wait) and args.wait and args.wait > 0:
        finished = wait(args.wait)
        if not finished:
            log_event(_logger, "cli.discovery_wait_expired", LogContext(identifier=args.provider), wait=args.wait)
    return provider


def handle_models(provider: Any, args: argparse.Namespace) -> int:
    models = provider.get_models_for_capability(args.capability)
    emit(
        {
            "provider": provider.id,
            "capability": args.capability,
            "count": len(models),
            "models": [m.to_dict() for m in _limit(models, args.limit)],
        }
    )
    return 0


def handle_free(provider: Any, args: argparse.Namespace) -> int:
    models = provider.get_free_models()
    emit({"provider": provider.id, "count": len(models), "models": [m.id for m in _limit(models, args.limit)]})
    return 0


def handle_status(provider: Any, args: argparse.Namespace) -> int:
    status = provider.get_service_status()
    describe = getattr(provider, "describe", None)
    info = describe() if callable(describe) else {"id": provider.id, "name": provider.name}
    emit({"provider": info, "service": status.to_dict()})
    return 0 if status.healthy else 1


def handle_generate(provider: Any, args: argparse.Namespace) -> int:
    options: Dict[str, Any] = {}
    if args.temperature is not None:
        options["temperature"] = args.temperature
    if args.max_tokens is not None:
        options["max_tokens"] = args.max_tokens
    try:
        model = provider.get_model(args.model)
        result = model.transform(args.prompt, **options)
    except ProviderError as e:
        emit_error(e)
        return 1
    emit(
        {
            "model": result.metadata.model,
            "content": result.content,
            "processing_time_ms": round(result.metadata.processing_time_ms, 1),
            "finish_reason": result.metadata.finish_reason,
            "usage": result.metadata.usage,
        }
    )
    return 0


HANDLERS = {
    "models": handle_models,
    "free": handle_free,
    "status": handle_status,
    "generate": handle_generate,
}


def run(registry: Any, args: argparse.Namespace) -> int:
    """Load the provider and dispatch ``args.cmd``."""
    try:
        provider = load_provider(registry, args)
    except (RegistryError, ProviderError) as e:
        emit_error(e)
        return 2
    return HANDLERS[args.cmd](provider, args)


__all__ = [
    "emit",
    "emit_error",
    "load_provider",
    "handle_models",
    "handle_free",
    "handle_status",
    "handle_generate",
    "HANDLERS",
    "run",
]
