"""HTTP-level tests for OpenRouterAPIClient using ``httpx.MockTransport``.

No network access: every request is answered by an in-process handler. Retry
backoff sleeps are captured instead of slept.
"""
from __future__ import annotations

import json
import time
from typing import Callable, List

import httpx
import pytest

from conduit_providers.base.errors import (
    AuthError,
    ErrorCode,
    ModelNotFoundError,
    ProviderError,
    RateLimitedError,
    TransportError,
)
from conduit_providers.openrouter.api_client import OpenRouterAPIClient

BASE = "https://openrouter.test/api/v1"


@pytest.fixture()
def sleeps(monkeypatch) -> List[float]:
    recorded: List[float] = []
    monkeypatch.setattr(time, "sleep", recorded.append)
    return recorded


def _client(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> OpenRouterAPIClient:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return OpenRouterAPIClient("sk-or-test", base_url=BASE + "/", http_client=http, **kwargs)


def _completion(content: str = "hello back", **extra) -> dict:
    body = {
        "id": "gen-123",
        "model": "openai/gpt-4o-mini",
        "choices": [{"message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
    }
    body.update(extra)
    return body


# ---- probe ----
def test_probe_sends_identification_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": {"label": "key"}})

    client = _client(handler, x_title="Host App", headers={"X-Trace": "abc"})
    assert client.test_connection() is True
    assert client.last_error is None

    req = seen[0]
    assert req.method == "GET"
    assert str(req.url) == f"{BASE}/auth/key"
    assert req.headers["Authorization"] == "Bearer sk-or-test"
    assert req.headers["HTTP-Referer"] == "https://MediaConduit.ai"
    assert req.headers["X-Title"] == "Host App"
    assert req.headers["X-Trace"] == "abc"


def test_probe_rejected_key_returns_false():
    client = _client(lambda r: httpx.Response(401, json={"error": {"message": "No auth credentials found"}}))
    assert client.test_connection() is False
    assert client.last_error == "No auth credentials found"


def test_probe_transport_failure_returns_false():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    assert client.test_connection() is False
    assert "connection refused" in client.last_error


# ---- listing ----
def test_list_models_returns_data_array():
    models = [{"id": "a/m1"}, {"id": "a/m2"}]
    client = _client(lambda r: httpx.Response(200, json={"data": models}))
    assert client.list_models() == models


def test_list_models_rejects_payload_without_data():
    client = _client(lambda r: httpx.Response(200, json={"items": []}))
    with pytest.raises(ProviderError) as ei:
        client.list_models()
    assert ei.value.code is ErrorCode.VALIDATION


def test_list_models_invalid_json():
    client = _client(lambda r: httpx.Response(200, content=b"<html>nope</html>"))
    with pytest.raises(ProviderError) as ei:
        client.list_models()
    assert ei.value.code is ErrorCode.VALIDATION


def test_list_models_404_is_unavailable_not_model_error():
    client = _client(lambda r: httpx.Response(404, text="gone"))
    with pytest.raises(TransportError) as ei:
        client.list_models()
    assert ei.value.code is ErrorCode.UNAVAILABLE
    assert not isinstance(ei.value, ModelNotFoundError)


def test_list_models_retries_rate_limit(sleeps):
    responses = iter(
        [
            httpx.Response(429, json={"error": {"message": "slow down"}}),
            httpx.Response(429, json={"error": {"message": "slow down"}}),
            httpx.Response(200, json={"data": [{"id": "a/m1"}]}),
        ]
    )
    client = _client(lambda r: next(responses))
    assert client.list_models() == [{"id": "a/m1"}]
    assert sleeps == [1.0, 2.0]


def test_rate_limit_exhausts_retries(sleeps):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(429, json={"error": {"message": "slow down"}})

    with pytest.raises(RateLimitedError):
        _client(handler).list_models()
    assert len(calls) == 3
    assert len(sleeps) == 2


def test_auth_failure_is_not_retried(sleeps):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    with pytest.raises(AuthError) as ei:
        _client(handler).list_models()
    assert ei.value.status == 401
    assert ei.value.retryable is False
    assert len(calls) == 1
    assert sleeps == []


def test_server_error_maps_to_transport_error(sleeps):
    client = _client(lambda r: httpx.Response(500, text="boom"))
    with pytest.raises(TransportError) as ei:
        client.list_models()
    assert ei.value.code is ErrorCode.SERVER_ERROR


def test_connect_error_is_retried_then_wrapped(sleeps):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as ei:
        _client(handler).list_models()
    assert ei.value.code is ErrorCode.TRANSIENT
    assert isinstance(ei.value.raw, httpx.ConnectError)
    assert len(sleeps) == 2


# ---- generation ----
def test_generate_builds_chat_payload():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=_completion())

    client = _client(handler)
    result = client.generate(
        "openai/gpt-4o-mini",
        "hello",
        system="be brief",
        temperature=0.2,
        max_tokens=64,
        top_p=None,
        not_forwarded=True,
    )

    payload = seen[0]
    assert payload["model"] == "openai/gpt-4o-mini"
    assert payload["messages"] == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "hello"},
    ]
    assert payload["temperature"] == 0.2
    assert payload["max_tokens"] == 64
    assert "top_p" not in payload
    assert "not_forwarded" not in payload

    assert result.content == "hello back"
    assert result.metadata.finish_reason == "stop"
    assert result.metadata.usage["total_tokens"] == 5
    assert result.metadata.provider == "openrouter"
    assert result.metadata.extra == {"id": "gen-123"}
    assert result.metadata.processing_time_ms >= 0


@pytest.mark.parametrize(
    "status,body",
    [
        (400, {"error": {"message": "nonexistent-id is not a valid model ID", "code": 400}}),
        (404, {"error": {"message": "No endpoints found for nonexistent-id"}}),
    ],
)
def test_generate_unknown_model(status, body):
    client = _client(lambda r: httpx.Response(status, json=body))
    with pytest.raises(ModelNotFoundError) as ei:
        client.generate("nonexistent-id", "hi")
    assert ei.value.code is ErrorCode.NOT_FOUND
    assert ei.value.model == "nonexistent-id"
    assert ei.value.status == status


def test_generate_plain_validation_error_is_not_model_error():
    client = _client(lambda r: httpx.Response(400, json={"error": {"message": "max_tokens must be positive"}}))
    with pytest.raises(ProviderError) as ei:
        client.generate("a/m1", "hi", max_tokens=-1)
    assert ei.value.code is ErrorCode.VALIDATION
    assert not isinstance(ei.value, ModelNotFoundError)


def test_generate_error_inside_ok_body():
    body = {"error": {"message": "Upstream provider returned 401", "code": 401}}
    client = _client(lambda r: httpx.Response(200, json=body))
    with pytest.raises(AuthError) as ei:
        client.generate("a/m1", "hi")
    assert ei.value.status == 401


def test_generate_retries_transient_gateway_error(sleeps, log_events):
    responses = iter([httpx.Response(502, text="bad gateway"), httpx.Response(200, json=_completion("ok"))])
    client = _client(lambda r: next(responses))

    assert client.generate("a/m1", "hi").content == "ok"
    assert sleeps == [1.0]
    attempts = [e for e in log_events if e["event"] == "retry.attempt"]
    assert attempts[0]["error_code"] == "transient"
    assert attempts[0]["model"] == "a/m1"
    assert any(e["event"] == "generate.end" for e in log_events)


def test_generate_empty_choices_yields_empty_content():
    client = _client(lambda r: httpx.Response(200, json={"choices": []}))
    result = client.generate("a/m1", "hi")
    assert result.content == ""
    assert result.metadata.model == "a/m1"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>gateway</html>"),
        httpx.Response(200, json=[{"x": 1}]),
        httpx.Response(200, json="done"),
    ],
)
def test_generate_malformed_ok_body_is_validation_error(response, sleeps):
    calls = []

    def handler(request):
        calls.append(request)
        return response

    with pytest.raises(ProviderError) as ei:
        _client(handler).generate("a/m1", "hi")
    assert ei.value.code is ErrorCode.VALIDATION
    assert ei.value.model == "a/m1"
    assert len(calls) == 1
    assert sleeps == []


def test_generate_tolerates_odd_choice_shapes():
    body = {"choices": [{"message": "not-an-object"}], "usage": ["x"]}
    client = _client(lambda r: httpx.Response(200, json=body))
    result = client.generate("a/m1", "hi")
    assert result.content == ""
    assert result.metadata.usage == {}
