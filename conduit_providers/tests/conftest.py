"""Pytest configuration for the conduit_providers test suite.

Every test runs with provider credentials scrubbed from the environment so
constructing an ``OpenRouterProvider`` never auto-configures itself or reaches
the network. Pooled HTTP clients are closed after each test.
"""

from __future__ import annotations

import json
import logging
from contextlib import suppress
from typing import Any, Dict, Iterator, List

import pytest

from conduit_providers.base.http import close_all_clients
from conduit_providers.base.logging import get_logger
from conduit_providers.config import reset_config_cache
from conduit_providers.tests.fakes import FakeAPIClient, descriptor


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Remove provider env vars and point .env/config lookups at nothing."""
    for var in (
        "OPENROUTER_API_KEY",
        "OPENROUTER_KEY",
        "OPENROUTER_BASE_URL",
        "OPENROUTER_HTTP_REFERER",
        "OPENROUTER_X_TITLE",
        "CONDUIT_CONFIG_FILE",
        "CONDUIT_TIMEOUT_DISCOVERY_SECONDS",
        "CONDUIT_TIMEOUT_PROBE_SECONDS",
        "CONDUIT_TIMEOUT_HTTP_SECONDS",
        "CONDUIT_TIMEOUT_LOAD_SECONDS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def fake_client() -> FakeAPIClient:
    return FakeAPIClient(
        models=[
            {"id": "a/m1", "name": "M1", "pricing": {"prompt": "$0", "completion": "$0"}},
            {"id": "a/m2", "name": "M2", "pricing": {"prompt": "$0.001", "completion": "$0.002"}},
        ]
    )


@pytest.fixture()
def seeded_descriptor():
    return descriptor("seed/original", input_cost=0.5, output_cost=0.5)


class _EventCollector(logging.Handler):
    """Collect ``log_event`` payloads emitted on the shared logger."""

    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        with suppress(ValueError):
            payload = json.loads(record.getMessage())
            if isinstance(payload, dict):
                payload.setdefault("level", record.levelname)
                self.events.append(payload)


@pytest.fixture()
def log_events() -> Iterator[List[Dict[str, Any]]]:
    """Yield the list of structured events logged during the test (INFO and up)."""
    logger = get_logger()
    collector = _EventCollector()
    logger.addHandler(collector)
    try:
        yield collector.events
    finally:
        logger.removeHandler(collector)
