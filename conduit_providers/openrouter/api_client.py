"""OpenRouter HTTP client (OpenAI-style API over ``httpx``).

Summary:
- ``test_connection`` probes ``GET /auth/key`` with the probe timeout and maps
  every failure to ``False``.
- ``list_models`` fetches ``GET /models`` with the discovery timeout.
- ``generate`` posts to ``/chat/completions`` through the retry policy.

Errors:
- HTTP and transport failures are classified with ``classify_exception`` /
  ``status_to_code`` and raised as the matching taxonomy subclass via
  ``error_for_code``. A 400 whose message names an unknown model is raised
  as ``ModelNotFoundError``.

Credentials travel as per-request headers; the pooled ``httpx.Client`` never
stores them.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ..base.errors import (
    ErrorCode,
    ProviderError,
    classify_exception,
    error_for_code,
    mentions_unknown_model,
    status_to_code,
)
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import GenerationMetadata, GenerationResult
from ..base.resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry
from ..base.timeouts import get_timeout_config
from ..config.defaults import (
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_HTTP_REFERER,
    OPENROUTER_DEFAULT_X_TITLE,
)

PROVIDER = "openrouter"

# Generation options forwarded verbatim to /chat/completions.
_PASSTHROUGH_OPTIONS = (
    "temperature",
    "max_tokens",
    "top_p",
    "top_k",
    "frequency_penalty",
    "presence_penalty",
    "repetition_penalty",
    "stop",
    "seed",
    "response_format",
)


def _error_message(resp: httpx.Response) -> str:
    """Extract the upstream error message from an error response body."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str):
            return err
        if data.get("message"):
            return str(data["message"])
    return resp.text or f"HTTP {resp.status_code}"


class OpenRouterAPIClient:
    """Authenticated client for the OpenRouter unified LLM API.

    Parameters:
        api_key: OpenRouter API key.
        base_url: API base URL (defaults to ``https://openrouter.ai/api/v1``).
        http_referer: Client identification sent as ``HTTP-Referer``.
        x_title: Client identification sent as ``X-Title``.
        headers: Extra static headers added to every request.
        http_client: Optional ``httpx.Client`` to use instead of the shared
            pool (tests inject one backed by ``httpx.MockTransport``).
        retry_config: Retry policy for ``list_models`` and ``generate``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        http_referer: Optional[str] = None,
        x_title: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        http_client: Optional[httpx.Client] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = (base_url or OPENROUTER_DEFAULT_BASE_URL).rstrip("/")
        self._http_referer = http_referer or OPENROUTER_DEFAULT_HTTP_REFERER
        self._x_title = x_title or OPENROUTER_DEFAULT_X_TITLE
        self._extra_headers = dict(headers or {})
        self._http_client = http_client
        self._logger = get_logger("openrouter.client")
        self._retry_config = retry_config or RetryConfig(
            max_attempts=DEFAULT_RETRY_CONFIG.max_attempts,
            delay_base=DEFAULT_RETRY_CONFIG.delay_base,
            max_delay=DEFAULT_RETRY_CONFIG.max_delay,
            attempt_logger=self._log_attempt,
        )
        self.last_error: Optional[str] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    # ---- plumbing ----
    def _client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self._base_url, purpose="openrouter.api")

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {
            "Authorization": f"Bearer {self._api_key}",
            "HTTP-Referer": self._http_referer,
            "X-Title": self._x_title,
            "Accept": "application/json",
        }
        headers.update(self._extra_headers)
        return headers

    def _log_attempt(self, *, attempt: int, max_attempts: int, delay: Optional[float], error: Optional[ProviderError]) -> None:
        if error is None:
            return
        log_event(
            self._logger,
            "retry.attempt",
            LogContext(provider=PROVIDER, model=error.model),
            attempt=attempt + 1,
            max_attempts=max_attempts,
            delay=delay,
            error_code=error.code.value,
        )

    def _wrap(self, exc: Exception, model: Optional[str]) -> ProviderError:
        code = classify_exception(exc)
        return error_for_code(code, str(exc) or type(exc).__name__, provider=PROVIDER, model=model, raw=exc)

    def _raise_for_status(self, resp: httpx.Response, model: Optional[str]) -> None:
        """Raise the taxonomy error matching a non-2xx response."""
        if resp.status_code < 400:
            return
        message = _error_message(resp)
        code = status_to_code(resp.status_code)
        if model is not None and code in (ErrorCode.VALIDATION, ErrorCode.NOT_FOUND) and (
            resp.status_code == 404 or mentions_unknown_model(message)
        ):
            code = ErrorCode.NOT_FOUND
        elif code == ErrorCode.NOT_FOUND and model is None:
            code = ErrorCode.UNAVAILABLE
        raise error_for_code(code, message, provider=PROVIDER, model=model, status=resp.status_code)

    # ---- UpstreamAPIClient ----
    def test_connection(self) -> bool:
        """Probe ``GET /auth/key``; returns False on any failure, never raises."""
        timeout = get_timeout_config().probe_timeout_seconds
        try:
            resp = self._client().get(self._url("/auth/key"), headers=self._headers(), timeout=timeout)
            self._raise_for_status(resp, model=None)
        except Exception as exc:  # noqa: BLE001 - probe maps every failure to False
            err = exc if isinstance(exc, ProviderError) else self._wrap(exc, None)
            self.last_error = err.message
            log_event(
                self._logger,
                "probe.failed",
                LogContext(provider=PROVIDER),
                error=err.message,
                error_code=err.code.value,
            )
            return False
        self.last_error = None
        return True

    def list_models(self) -> List[Dict[str, Any]]:
        """Return the raw ``data`` array of ``GET /models``.

        Raises:
            AuthError: Credentials rejected.
            TransportError: Network failure, timeout, or 5xx.
            ProviderError: The payload is not a JSON object with a ``data`` list.
        """
        timeout = get_timeout_config().discovery_timeout_seconds

        @retry(self._retry_config)
        def _fetch() -> List[Dict[str, Any]]:
            try:
                resp = self._client().get(self._url("/models"), headers=self._headers(), timeout=timeout)
            except httpx.HTTPError as exc:
                raise self._wrap(exc, None) from exc
            self._raise_for_status(resp, model=None)
            try:
                data = resp.json()
            except ValueError as exc:
                raise ProviderError(
                    code=ErrorCode.VALIDATION,
                    message=f"Model listing is not valid JSON: {exc}",
                    provider=PROVIDER,
                    raw=exc,
                ) from exc
            items = data.get("data") if isinstance(data, dict) else data
            if not isinstance(items, list):
                raise ProviderError(
                    code=ErrorCode.VALIDATION,
                    message="Model listing has no 'data' array",
                    provider=PROVIDER,
                )
            return items

        return _fetch()

    def generate(self, model_id: str, prompt: str, **options: Any) -> GenerationResult:
        """Run one chat completion with a single user message.

        Recognized ``options``: ``system`` (system prompt) plus the sampling
        parameters in ``_PASSTHROUGH_OPTIONS``; ``None`` values are dropped.

        Raises:
            ModelNotFoundError: The upstream rejected ``model_id``.
            RateLimitedError: Throttled after retries.
            AuthError: Credentials rejected.
            TransportError: Network failure, timeout, or 5xx after retries.
            ProviderError: ``VALIDATION`` when a 200 body is not a JSON object.
        """
        messages: List[Dict[str, str]] = []
        if system := options.get("system"):
            messages.append({"role": "system", "content": str(system)})
        messages.append({"role": "user", "content": prompt})
        payload: Dict[str, Any] = {"model": model_id, "messages": messages}
        payload.update({k: options[k] for k in _PASSTHROUGH_OPTIONS if options.get(k) is not None})

        ctx = LogContext(provider=PROVIDER, model=model_id)
        log_event(self._logger, "generate.start", ctx, max_tokens=payload.get("max_tokens"), temperature=payload.get("temperature"))
        timeout = get_timeout_config().http_timeout_seconds

        @retry(self._retry_config)
        def _post() -> Dict[str, Any]:
            try:
                resp = self._client().post(
                    self._url("/chat/completions"), json=payload, headers=self._headers(), timeout=timeout
                )
            except httpx.HTTPError as exc:
                raise self._wrap(exc, model_id) from exc
            self._raise_for_status(resp, model=model_id)
            try:
                body = resp.json()
            except ValueError as exc:
                raise ProviderError(
                    code=ErrorCode.VALIDATION,
                    message=f"Completion response is not valid JSON: {exc}",
                    provider=PROVIDER,
                    model=model_id,
                    raw=exc,
                ) from exc
            if not isinstance(body, dict):
                raise ProviderError(
                    code=ErrorCode.VALIDATION,
                    message=f"Completion response is not an object: {type(body).__name__}",
                    provider=PROVIDER,
                    model=model_id,
                )
            # OpenRouter may report upstream failures inside a 200 body.
            err = body.get("error")
            if err:
                message = err.get("message", str(err)) if isinstance(err, dict) else str(err)
                status = err.get("code") if isinstance(err, dict) and isinstance(err.get("code"), int) else None
                code = ErrorCode.NOT_FOUND if mentions_unknown_model(message) else (
                    status_to_code(status) if status else ErrorCode.UNKNOWN
                )
                raise error_for_code(code, message, provider=PROVIDER, model=model_id, status=status)
            return body

        t0 = time.perf_counter()
        body = _post()
        latency_ms = (time.perf_counter() - t0) * 1000.0

        choices = body.get("choices")
        choice = choices[0] if isinstance(choices, list) and choices and isinstance(choices[0], dict) else {}
        message = choice.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        usage = body.get("usage")
        metadata = GenerationMetadata(
            processing_time_ms=latency_ms,
            model=body.get("model") or model_id,
            provider=PROVIDER,
            finish_reason=choice.get("finish_reason"),
            usage=dict(usage) if isinstance(usage, dict) else {},
            extra={"id": body.get("id")} if body.get("id") else {},
        )
        log_event(self._logger, "generate.end", ctx, latency_ms=latency_ms, finish_reason=metadata.finish_reason)
        return GenerationResult(content=content if isinstance(content, str) else "", metadata=metadata)


__all__ = ["OpenRouterAPIClient", "PROVIDER"]
