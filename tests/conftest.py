from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

import claire.clients
from claire.main import app
from claire.middleware.rate_limit import limiter

# Rate limits are exercised by slowapi itself; keep them out of the way here
limiter.enabled = False


class FakeQAService:
    """Records requests sent to the Q&A service and replies with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json=[])

    def reply_json(self, payload: Any, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, json=payload)

    def reply_text(self, text: str, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, text=text)

    def fail_with(self, exc: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self.handler = _raise

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def anyio_backend() -> str:
    """Configure anyio to use the asyncio backend for all async tests."""
    return "asyncio"


@pytest.fixture
async def qa_service(monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[FakeQAService]:
    """Swap the shared Q&A client for one backed by an in-process fake service."""
    service = FakeQAService()
    client = httpx.AsyncClient(transport=httpx.MockTransport(service))
    monkeypatch.setattr(claire.clients, "_qa_client", client)
    try:
        yield service
    finally:
        await client.aclose()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client for API integration tests.

    Yields an ``AsyncClient`` wired directly to the FastAPI ASGI app so no
    real network socket is required during testing.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
