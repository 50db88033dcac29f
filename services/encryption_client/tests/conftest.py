"""Pytest fixtures for encryption client tests."""

import asyncio
from typing import Any, AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from services.encryption_client.app.api import deps
from services.encryption_client.app.config import EncryptionApiSettings
from services.encryption_client.app.main import app
from services.encryption_client.app.relay.client import EncryptionApiClient

UPSTREAM_URL = "http://encryption.test"


class FakeUpstream:
    """Stand-in for the upstream encryption service.

    Records every request it receives and answers from per-route canned
    responses. Routes without a canned response get a 404.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], dict[str, Any]] = {}

    def on(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
        delay: float = 0,
        error: Exception | None = None,
    ) -> None:
        """Register the response for a method and path."""
        self._routes[(method, path)] = {
            "status_code": status_code,
            "json": json,
            "text": text,
            "delay": delay,
            "error": error,
        }

    def requests_to(self, path: str) -> list[httpx.Request]:
        """Requests received on a path."""
        return [r for r in self.requests if r.url.path == path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="no such route")

        if route["delay"]:
            await asyncio.sleep(route["delay"])
        if route["error"] is not None:
            raise route["error"]
        if route["text"] is not None:
            return httpx.Response(route["status_code"], text=route["text"])
        return httpx.Response(route["status_code"], json=route["json"])


@pytest.fixture
def api_settings() -> EncryptionApiSettings:
    """Upstream configuration pointing at the fake service."""
    return EncryptionApiSettings(
        base_url=UPSTREAM_URL,
        encrypt_endpoint="/api/encryption/encrypt",
        decrypt_endpoint="/api/encryption/decrypt",
        fields_endpoint="/api/encryption/fields",
        health_endpoint="/api/encryption/health",
        connect_timeout=100,
        read_timeout=1000,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    """Fake upstream encryption service."""
    return FakeUpstream()


@pytest_asyncio.fixture
async def relay_client(
    api_settings: EncryptionApiSettings,
    upstream: FakeUpstream,
) -> AsyncGenerator[EncryptionApiClient, None]:
    """Relay client wired to the fake upstream."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    relay = EncryptionApiClient(api_settings, client=http_client)
    yield relay
    await relay.close()


@pytest_asyncio.fixture
async def client(relay_client: EncryptionApiClient) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the gateway app, relaying to the fake upstream."""
    app.dependency_overrides[deps.get_encryption_client] = lambda: relay_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
