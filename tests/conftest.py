"""
Pytest configuration and shared fixtures.

FakeTodoAPI stands in for the remote service: it records every request the
client sends and answers with a canned httpx.Response through MockTransport.
"""
import pytest
import httpx
from unittest.mock import patch

from todoctl.adapters.http_client import HttpxAsyncClientAdapter
from todoctl.config import get_settings


class FakeTodoAPI:
    """Records requests and replies with a configurable response."""

    def __init__(self):
        self.requests = []
        self.response = httpx.Response(200, json=[])
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    def create_client(self, **kwargs):
        return HttpxAsyncClientAdapter(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        assert len(self.requests) == 1, f"expected one request, got {len(self.requests)}"
        return self.requests[0]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the caller's environment and cached settings."""
    for var in ("TODOCTL_API_KEY", "TODOCTL_COLOR",
                "TODOCTL_LOG_LEVEL", "FORCE_COLOR", "TTY_COMPATIBLE"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_api():
    """Route every client the runner creates to a FakeTodoAPI."""
    api = FakeTodoAPI()
    with patch('todoctl.adapters.http_client.HTTPClientAdapterFactory.create_async_client',
               side_effect=api.create_client):
        yield api
