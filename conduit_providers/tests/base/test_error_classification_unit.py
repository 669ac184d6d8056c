from __future__ import annotations

import types

import httpx

from conduit_providers.base.errors import (
    AuthError,
    DiscoveryError,
    ErrorCode,
    MissingCredentialsError,
    ModelNotFoundError,
    NotConfiguredError,
    ProviderError,
    ProviderLoadFailure,
    RateLimitedError,
    SourceInvalidError,
    TransportError,
    classify_exception,
    error_for_code,
    mentions_unknown_model,
    status_to_code,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101 - assert is appropriate in unit tests
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101 - assert is appropriate in unit tests


def test_classify_httpx_exceptions():
    req = httpx.Request("GET", "https://openrouter.ai/api/v1/models")
    assert classify_exception(httpx.ReadTimeout("slow", request=req)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused", request=req)) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_status_to_code_defaults():
    assert status_to_code(401) is ErrorCode.AUTH  # nosec B101
    assert status_to_code(429) is ErrorCode.RATE_LIMIT  # nosec B101
    assert status_to_code(599) is ErrorCode.SERVER_ERROR  # nosec B101
    assert status_to_code(418) is ErrorCode.UNKNOWN  # nosec B101


def test_mentions_unknown_model():
    assert mentions_unknown_model("foo/bar is not a valid model ID")  # nosec B101
    assert mentions_unknown_model("No endpoints found for foo/bar.")  # nosec B101
    assert not mentions_unknown_model("Insufficient credits")  # nosec B101


def test_error_for_code_builds_taxonomy_subclasses():
    cases = {
        ErrorCode.NOT_FOUND: ModelNotFoundError,
        ErrorCode.RATE_LIMIT: RateLimitedError,
        ErrorCode.AUTH: AuthError,
        ErrorCode.TIMEOUT: TransportError,
        ErrorCode.SERVER_ERROR: TransportError,
        ErrorCode.VALIDATION: ProviderError,
    }
    for code, klass in cases.items():
        err = error_for_code(code, "m", provider="openrouter", model="a/b", status=400)
        assert type(err) is klass  # nosec B101
        assert err.code is code  # nosec B101
    assert error_for_code(ErrorCode.RATE_LIMIT, "m", provider="p").retryable  # nosec B101
    assert not error_for_code(ErrorCode.AUTH, "m", provider="p").retryable  # nosec B101


def test_error_strings_and_fixed_codes():
    assert MissingCredentialsError("openrouter").code is ErrorCode.MISSING_CREDENTIALS  # nosec B101
    assert NotConfiguredError("openrouter").code is ErrorCode.NOT_CONFIGURED  # nosec B101
    assert DiscoveryError("openrouter", "bad entry").code is ErrorCode.DISCOVERY_FAILED  # nosec B101
    err = ModelNotFoundError(code=ErrorCode.NOT_FOUND, message="gone", provider="openrouter", model="a/b")
    assert str(err) == "openrouter:a/b not_found: gone"  # nosec B101


def test_load_failure_cause_code():
    cause = SourceInvalidError("x", "no constructor")
    failure = ProviderLoadFailure("x", cause)
    assert failure.cause_code is ErrorCode.SOURCE_INVALID  # nosec B101
    assert ProviderLoadFailure("x", RuntimeError("boom")).cause_code is ErrorCode.LOAD_FAILED  # nosec B101
