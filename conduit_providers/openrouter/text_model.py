"""Text-to-text model handle bound to one OpenRouter model id.

Handles are short-lived: they hold the API client and a model id, nothing
else. The id is not checked against the catalog; an unknown id surfaces as
``ModelNotFoundError`` from ``transform``.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.capabilities import CapabilityTag
from ..base.interfaces import UpstreamAPIClient
from ..base.models import GenerationResult, ModelDescriptor


class OpenRouterTextToTextModel:
    """Model handle issuing generations for ``model_id``.

    Parameters:
        api_client: Client of the configuration generation that created the handle.
        model_id: Upstream model id (``vendor/model[:variant]``).
        descriptor: Catalog entry, when the id was known at creation time;
            supplies parameter defaults.
    """

    capability = CapabilityTag.TEXT_TO_TEXT

    def __init__(
        self,
        api_client: UpstreamAPIClient,
        model_id: str,
        descriptor: Optional[ModelDescriptor] = None,
    ) -> None:
        self._client = api_client
        self._model_id = model_id
        self._descriptor = descriptor

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def descriptor(self) -> Optional[ModelDescriptor]:
        return self._descriptor

    def get_id(self) -> str:
        return self._model_id

    def get_name(self) -> str:
        return self._descriptor.name if self._descriptor else self._model_id

    def is_available(self) -> bool:
        return self._client.test_connection()

    def default_options(self) -> Dict[str, Any]:
        """Parameter defaults from the catalog entry (empty for unknown ids)."""
        if self._descriptor is None:
            return {}
        return {
            name: spec.default for name, spec in self._descriptor.parameters.items() if spec.default is not None
        }

    def transform(self, prompt: str, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> GenerationResult:
        """Generate text for ``prompt``.

        Explicit ``options``/``kwargs`` override the catalog defaults.

        Raises:
            ValueError: ``prompt`` is not a string.
            ModelNotFoundError: The upstream does not know this model id.
        """
        if not isinstance(prompt, str):
            raise ValueError("prompt must be a string")
        merged = self.default_options()
        merged.update(options or {})
        merged.update(kwargs)
        return self._client.generate(self._model_id, prompt, **merged)

    def __repr__(self) -> str:
        return f"OpenRouterTextToTextModel(model_id={self._model_id!r})"


__all__ = ["OpenRouterTextToTextModel"]
