"""Tests for the search service HTTP surface."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from omdb_search.remote import RemoteConfigurationError
from omdb_search.service.main import create_app


@pytest.fixture
def stub_client(config, json_transport, batman_envelope):
    """Test client whose remote service answers with the Batman envelope."""
    captured = []
    app = create_app(config, transport=json_transport(batman_envelope, captured=captured))
    with TestClient(app) as client:
        client.captured = captured
        yield client


def test_search_success(stub_client):
    """Test a search is proxied and re-encoded."""
    response = stub_client.post("/search", content=b'{"title":"Batman","api_verison":"1"}')

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.content == b'[{"Title":"Batman","Year":"1989","IMDBID":"tt0096895","Type":"movie"}]'

    assert len(stub_client.captured) == 1
    sent = stub_client.captured[0].url
    assert sent.params["s"] == "Batman"
    assert sent.params["apikey"] == "test-key"
    assert "type" not in sent.params
    assert "y" not in sent.params


def test_search_passes_optional_fields(stub_client):
    """Test type and release year are forwarded."""
    response = stub_client.post(
        "/search",
        json={"title": "Batman", "type": "movie", "release_year": "1989", "api_verison": "1"},
    )

    assert response.status_code == 200
    sent = stub_client.captured[0].url
    assert sent.params["type"] == "movie"
    assert sent.params["y"] == "1989"


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH", "OPTIONS", "TRACE", "FOO"])
def test_search_wrong_method(stub_client, method):
    """Test any method other than POST is not found."""
    response = stub_client.request(method, "/search")

    assert response.status_code == 404
    assert response.text == "404 page not found\n"
    assert stub_client.captured == []


def test_search_unlisted_method_is_labeled_search(stub_client):
    """Test a method outside the routed list is counted against /search."""
    response = stub_client.request("TRACE", "/search")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/plain")
    registry = stub_client.app.state.metrics_collector.registry
    assert registry.get_sample_value(
        "http_requests_total", {"method": "TRACE", "endpoint": "/search", "status": "404"}
    ) == 1.0


def test_search_field_names_ignore_case(stub_client):
    """Test request field names match regardless of case."""
    response = stub_client.post("/search", json={"Title": "Batman", "TYPE": "movie", "Release_Year": "1989"})

    assert response.status_code == 200
    sent = stub_client.captured[0].url
    assert sent.params["s"] == "Batman"
    assert sent.params["type"] == "movie"
    assert sent.params["y"] == "1989"


def test_search_title_too_long_for_url(stub_client):
    """Test a title that cannot fit in a URL yields 500 with the URL error."""
    response = stub_client.post("/search", json={"title": "x" * 70000})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert "too long" in response.text
    assert response.text != "Internal Server Error"
    assert stub_client.captured == []


def test_search_null_result_item(config, json_transport):
    """Test a null entry in the remote result list yields 500."""
    with TestClient(create_app(config, transport=json_transport({"Search": [None]}))) as client:
        response = client.post("/search", json={"title": "Batman"})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.strip()


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b"",
        b"[]",
        b'{"title": 5}',
        b'{"type": "movie"}',
        b'{"title": ""}',
    ],
)
def test_search_bad_request(stub_client, body):
    """Test unparseable or wrongly shaped bodies are rejected."""
    response = stub_client.post("/search", content=body)

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.strip()
    assert stub_client.captured == []


def test_search_remote_unreachable(config, failing_transport):
    """Test an unreachable remote service yields 500 with the error text."""
    transport = failing_transport(
        lambda request: httpx.ConnectError("[Errno 111] Connection refused", request=request)
    )
    with TestClient(create_app(config, transport=transport)) as client:
        response = client.post("/search", json={"title": "Batman", "api_verison": "1"})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert "Connection refused" in response.text


def test_search_remote_malformed(config):
    """Test an undecodable remote response yields 500."""
    transport = httpx.MockTransport(lambda request: httpx.Response(502, content=b"Bad Gateway"))
    with TestClient(create_app(config, transport=transport)) as client:
        response = client.post("/search", json={"title": "Batman"})

    assert response.status_code == 500
    assert response.text.strip()


def test_search_remote_error_status_with_envelope(config, json_transport, batman_envelope):
    """Test a non-2xx remote status with a valid envelope is relayed as success."""
    with TestClient(create_app(config, transport=json_transport(batman_envelope, status_code=401))) as client:
        response = client.post("/search", json={"title": "Batman"})

    assert response.status_code == 200
    assert response.json()[0]["IMDBID"] == "tt0096895"


def test_search_no_results(config, json_transport):
    """Test OMDb's not-found envelope becomes an empty array."""
    payload = {"Response": "False", "Error": "Movie not found!"}
    with TestClient(create_app(config, transport=json_transport(payload))) as client:
        response = client.post("/search", json={"title": "zzzzzz"})

    assert response.status_code == 200
    assert response.json() == []


def test_static_index(stub_client):
    """Test the front end is served at /."""
    response = stub_client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "search.js" in response.text

    assert stub_client.get("/search.js").status_code == 200
    assert stub_client.get("/missing.txt").status_code == 404


def test_custom_site_dir(config, json_transport, tmp_path):
    """Test static files come from the configured directory."""
    site = tmp_path / "site"
    site.mkdir()
    (site / "index.html").write_text("<p>custom</p>")
    app = create_app(config.model_copy(update={"omdb_site_dir": str(site)}), transport=json_transport([]))

    with TestClient(app) as client:
        assert client.get("/").text == "<p>custom</p>"


def test_missing_site_dir(config, json_transport, tmp_path):
    """Test a missing site directory leaves the API working."""
    app = create_app(
        config.model_copy(update={"omdb_site_dir": str(tmp_path / "absent")}),
        transport=json_transport({"Search": []}),
    )

    with TestClient(app) as client:
        assert client.get("/").status_code == 404
        assert client.post("/search", json={"title": "x"}).json() == []


def test_health(stub_client):
    """Test the health endpoint."""
    response = stub_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "omdb-search"}


def test_metrics(stub_client):
    """Test request and upstream metrics are exposed."""
    stub_client.post("/search", json={"title": "Batman"})
    stub_client.get("/search")

    response = stub_client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text

    registry = stub_client.app.state.metrics_collector.registry
    assert registry.get_sample_value(
        "http_requests_total", {"method": "POST", "endpoint": "/search", "status": "200"}
    ) == 1.0
    assert registry.get_sample_value(
        "http_requests_total", {"method": "GET", "endpoint": "/search", "status": "404"}
    ) == 1.0
    assert registry.get_sample_value("omdb_upstream_requests_total", {"outcome": "success"}) == 1.0


def test_process_time_header(stub_client):
    """Test every response carries X-Process-Time."""
    assert "x-process-time" in stub_client.get("/health").headers


def test_create_app_requires_api_key(config):
    """Test the application cannot be built without a key."""
    with pytest.raises(RemoteConfigurationError):
        create_app(config.model_copy(update={"omdb_api_key": None}))


def test_create_app_rejects_malformed_base_url(config):
    """Test the application cannot be built with a malformed base URL."""
    with pytest.raises(RemoteConfigurationError):
        create_app(config.model_copy(update={"omdb_base_url": "omdb"}))


def test_response_is_json_array(stub_client):
    """Test the success body decodes as a JSON array."""
    response = stub_client.post("/search", json={"title": "Batman"})
    assert isinstance(json.loads(response.content), list)
