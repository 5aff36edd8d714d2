"""Shared fixtures for search service tests."""

import json
from typing import Callable

import httpx
import pytest

from omdb_search.common.config import SearchServiceConfig

BATMAN_ENVELOPE = {
    "Search": [
        {"Title": "Batman", "Year": "1989", "imdbID": "tt0096895", "Type": "movie"},
    ],
    "totalResults": "1",
    "Response": "True",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep OMDB_* variables and any ``.env`` file from leaking into tests."""
    for name in (
        "OMDB_ENV",
        "OMDB_API_KEY",
        "OMDB_BASE_URL",
        "OMDB_TIMEOUT_SECONDS",
        "OMDB_HOST",
        "OMDB_PORT",
        "OMDB_SITE_DIR",
        "OMDB_LOG_LEVEL",
        "OMDB_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config() -> SearchServiceConfig:
    """Service configuration with a test key."""
    return SearchServiceConfig(omdb_api_key="test-key", omdb_base_url="http://omdb.test/")


def _json_transport(payload, status_code: int = 200, captured: list = None) -> httpx.MockTransport:
    """Transport answering every request with ``payload`` as JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return httpx.MockTransport(handler)


def _failing_transport(exc_factory: Callable[[httpx.Request], Exception]) -> httpx.MockTransport:
    """Transport raising the exception built by ``exc_factory`` for every request."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_factory(request)

    return httpx.MockTransport(handler)


@pytest.fixture
def json_transport():
    """Factory for transports answering with a fixed JSON payload."""
    return _json_transport


@pytest.fixture
def failing_transport():
    """Factory for transports raising a transport error."""
    return _failing_transport


@pytest.fixture
def batman_envelope() -> dict:
    return json.loads(json.dumps(BATMAN_ENVELOPE))
