"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import json

import httpx
import pytest

from image_lookup.shared.config import LookupConfig, reset_config

BASE_URL = "https://duckduckgo.com/"


# ============================================================
# Fake Provider
# ============================================================


class FakeProvider:
    """
    httpx.MockTransport handler standing in for duckduckgo.com.

    Records every request so tests can assert on call counts, order,
    headers and query parameters.
    """

    def __init__(
        self,
        homepage: str = "<html>vqd=998-877&amp;</html>",
        search_body: object | None = None,
        *,
        homepage_status: int = 200,
        search_status: int = 200,
        raw_search_body: bytes | None = None,
    ) -> None:
        self.homepage = homepage
        self.search_body = search_body if search_body is not None else {"results": []}
        self.homepage_status = homepage_status
        self.search_status = search_status
        self.raw_search_body = raw_search_body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/i.js":
            if self.raw_search_body is not None:
                return httpx.Response(self.search_status, content=self.raw_search_body)
            return httpx.Response(self.search_status, content=json.dumps(self.search_body).encode())
        return httpx.Response(self.homepage_status, text=self.homepage)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/"]

    @property
    def search_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/i.js"]


# ============================================================
# Fixtures
# ============================================================


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep IMAGE_LOOKUP_* variables and the config singleton out of tests."""
    for name in (
        "IMAGE_LOOKUP_BASE_URL",
        "IMAGE_LOOKUP_TIMEOUT",
        "IMAGE_LOOKUP_TOKEN_ATTEMPTS",
        "IMAGE_LOOKUP_API_HOST",
        "IMAGE_LOOKUP_API_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    """Fast-failing config pointing at the default provider."""
    return LookupConfig(base_url=BASE_URL, timeout=2.0)


@pytest.fixture
def pizza_body():
    """Search response with two candidates."""
    return {
        "results": [
            {
                "image": "https://img/pizza.jpg",
                "thumbnail": "https://tse.mm.bing.net/th?id=1",
                "title": "Pizza",
                "url": "https://example.com/pizza",
                "width": 1200,
                "height": 800,
                "source": "Bing",
            },
            {"image": "https://img/pizza2.jpg"},
        ],
        "next": "i.js?q=pizza&o=json&p=2&s=100",
    }


@pytest.fixture
def pizza_provider(pizza_body):
    """Provider answering the 'pizza' end-to-end scenario."""
    return FakeProvider(
        homepage='<script>nrj("/d.js?q=pizza&t=D&l=us-en&s=0&ct=US&vqd=998-877&p_ent=")</script>',
        search_body=pizza_body,
    )
