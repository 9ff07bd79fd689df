"""Shared fixtures for the Coggle client tests.

Provides:
- A fake Coggle service (FastAPI, in memory) and a client wired to it
- A recording httpx.MockTransport for asserting on the exact requests sent
"""

from __future__ import annotations

import json
from typing import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio

from coggle_api import CoggleApi
from fake_service import create_app

TEST_TOKEN = "test-token"
TEST_BASE_URL = "http://coggle.test"


# ---------------------------------------------------------------------------
# Fake service
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_app():
    return create_app(token=TEST_TOKEN)


@pytest.fixture
def fake_store(fake_app):
    return fake_app.state.coggle


@pytest_asyncio.fixture
async def api(fake_app) -> AsyncGenerator[CoggleApi, None]:
    """Client talking to the fake service through an in-process ASGI transport."""
    transport = httpx.ASGITransport(app=fake_app)
    async with CoggleApi(token=TEST_TOKEN, base_url=TEST_BASE_URL, transport=transport) as client:
        yield client


# ---------------------------------------------------------------------------
# Recording mock transport
# ---------------------------------------------------------------------------

class Recorder:
    """Answers every request with a canned response and remembers the requests."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest_asyncio.fixture
async def recorder_factory():
    """Build a (Recorder, CoggleApi) pair answering with `handler`."""
    clients = []

    def make(handler):
        recorder = Recorder(handler)
        client = CoggleApi(token=TEST_TOKEN, base_url=TEST_BASE_URL, transport=recorder.transport)
        clients.append(client)
        return recorder, client

    yield make
    for client in clients:
        await client.aclose()
