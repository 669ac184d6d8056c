"""UpstreamAPIClient Protocol (single-class module).

The boundary between a provider and the concrete HTTP client talking to the
unified-LLM API.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol, runtime_checkable

from ..models import GenerationResult


@runtime_checkable
class UpstreamAPIClient(Protocol):
    """Authenticated client for listing models and running generations."""

    def test_connection(self) -> bool:
        """Probe connectivity and credentials.

        Never raises: network, timeout and auth failures all map to ``False``.
        """
        ...

    def list_models(self) -> Iterable[Mapping[str, Any]]:
        """Return raw model descriptors from the upstream listing.

        Each entry carries at least ``id`` and usually ``name``,
        ``description`` and ``pricing`` (``{"prompt": str, "completion": str}``).
        Raises ``TransportError``/``AuthError`` on failure.
        """
        ...

    def generate(self, model_id: str, prompt: str, **options: Any) -> GenerationResult:
        """Run one generation against ``model_id``.

        Raises ``ModelNotFoundError`` when the upstream rejects the id, and
        ``RateLimitedError``/``TransportError``/``AuthError`` otherwise.
        """
        ...
