"""Tests for the HTTP API (GET /api/searchImage)."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import FakeProvider
from image_lookup import __version__
from image_lookup.api.server import app, get_lookup_service
from image_lookup.application.image_lookup import ImageLookupService


@pytest.fixture
def use_provider(config):
    """Route the endpoint's lookup service through a FakeProvider."""

    def install(provider) -> None:
        transport = provider if isinstance(provider, httpx.MockTransport) else provider.transport
        app.dependency_overrides[get_lookup_service] = lambda: ImageLookupService(config, transport=transport)

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestSearchImageEndpoint:
    def test_success(self, client, use_provider, pizza_provider):
        use_provider(pizza_provider)

        response = client.get("/api/searchImage", params={"q": "pizza"})

        assert response.status_code == 200
        assert response.json() == {"imageUrl": "https://img/pizza.jpg"}

    def test_idempotent(self, client, use_provider, pizza_provider):
        use_provider(pizza_provider)
        first = client.get("/api/searchImage", params={"q": "pizza"}).json()
        second = client.get("/api/searchImage", params={"q": "pizza"}).json()
        assert first == second

    def test_missing_q(self, client, use_provider, pizza_provider):
        use_provider(pizza_provider)

        response = client.get("/api/searchImage")

        assert response.status_code == 400
        assert response.json() == {"error": 'Query parameter "q" is required.', "kind": "InputValidation"}
        assert pizza_provider.requests == []

    def test_blank_q(self, client, use_provider, pizza_provider):
        use_provider(pizza_provider)
        response = client.get("/api/searchImage", params={"q": "  "})
        assert response.status_code == 400
        assert pizza_provider.requests == []

    def test_repeated_q(self, client, use_provider, pizza_provider):
        use_provider(pizza_provider)
        response = client.get("/api/searchImage?q=pizza&q=pasta")
        assert response.status_code == 400
        assert response.json()["kind"] == "InputValidation"
        assert pizza_provider.requests == []

    def test_no_results(self, client, use_provider):
        use_provider(FakeProvider(search_body={"results": []}))

        response = client.get("/api/searchImage", params={"q": "qwxzv"})

        assert response.status_code == 404
        assert response.json() == {"error": "No images found.", "kind": "NoResults"}

    def test_token_not_found(self, client, use_provider):
        use_provider(FakeProvider(homepage="<html></html>"))

        response = client.get("/api/searchImage", params={"q": "pizza"})

        assert response.status_code == 500
        body = response.json()
        assert body["kind"] == "TokenNotFound"
        assert body["error"] == "Error fetching image: Token Parsing Failed!"

    def test_transport_failure_includes_cause(self, client, use_provider):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        use_provider(httpx.MockTransport(refuse))

        response = client.get("/api/searchImage", params={"q": "pizza"})

        assert response.status_code == 500
        body = response.json()
        assert body["kind"] == "ServiceUnavailable"
        assert body["error"].startswith("Error fetching image: ")
        assert "Name or service not known" in body["error"]

    def test_parse_failure_includes_cause(self, client, use_provider):
        use_provider(FakeProvider(raw_search_body=b"<html>oops</html>"))

        response = client.get("/api/searchImage", params={"q": "pizza"})

        assert response.status_code == 500
        body = response.json()
        assert body["kind"] == "ParseFailure"
        assert "Invalid JSON response" in body["error"]
        assert "(" in body["error"]


    def test_status_failure_message_is_single_line(self, client, use_provider):
        use_provider(FakeProvider(search_status=503))

        response = client.get("/api/searchImage", params={"q": "pizza"})

        assert response.status_code == 500
        error = response.json()["error"]
        assert "\n" not in error
        assert "developer.mozilla.org" not in error
        assert "HTTP 503" in error

class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}
