"""Shared fixtures: isolated settings and a stub upstream on httpx.MockTransport."""

from typing import Callable, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from newscat_gateway.core.config import Settings
from newscat_gateway.main import create_app

TEST_API_KEY = "test-key-1234567890"


class StubUpstream:
    """Records every outbound request and answers with ``responder``."""

    def __init__(self, responder: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self.responder = responder or (lambda request: httpx.Response(200, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def call_count(self) -> int:
        return len(self.requests)


def make_settings(**overrides) -> Settings:
    """Settings independent of the developer's .env file."""
    values = {"NEWS_API_KEY": TEST_API_KEY, "LOG_FORMAT": "text"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def stub_upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture
def make_client(stub_upstream):
    """Factory building a TestClient around a fresh app and the stub upstream."""
    def _make(**overrides) -> TestClient:
        app = create_app(make_settings(**overrides), transport=stub_upstream.transport)
        return TestClient(app, raise_server_exceptions=False)
    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
