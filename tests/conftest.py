"""
Pytest configuration and shared fixtures for the WordPress Elementor MCP tests.
"""

import json
from typing import Callable

import httpx
import pytest

from core.client import ClientProvider
from core.config import ConfigLoader

WP_ENV = {
    "WP_URL": "https://example.com/",
    "WP_APP_USER": "admin",
    "WP_APP_PASSWORD": "secret",
}


class FakeWordPress:
    """Records every request and answers with `responder` (200 + {} by default)."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def reply(self, status_code: int = 200, **kwargs) -> None:
        self.responder = lambda request: httpx.Response(status_code, **kwargs)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Run every test against default settings instead of the checked-in config.yaml."""
    monkeypatch.setenv("WP_MCP_CONFIG", str(tmp_path / "missing-config.yaml"))
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def wordpress() -> FakeWordPress:
    return FakeWordPress()


@pytest.fixture
def provider(wordpress: FakeWordPress) -> ClientProvider:
    provider = ClientProvider(transport=httpx.MockTransport(wordpress))
    provider.initialize(WP_ENV)
    return provider


@pytest.fixture
def client(provider: ClientProvider):
    return provider.get_client()
