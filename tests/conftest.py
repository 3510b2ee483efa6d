"""Shared fixtures for the skills client tests."""

import httpx
import pytest
from fastapi.testclient import TestClient

from skills_client import SkillsClient
from skills_client.testing import SkillStore, create_app

BASE_URL = "http://testserver"
TOKEN = "test-token"
API_KEY = "test-api-key"


@pytest.fixture
def store():
    """Empty in-memory skill store."""
    return SkillStore()


@pytest.fixture
def app(store):
    """Stub skills service requiring the test credentials."""
    return create_app(store, token=TOKEN, api_key=API_KEY)


@pytest.fixture
def client(app):
    """Sync client talking to the stub service."""
    with TestClient(app) as transport:
        yield SkillsClient(BASE_URL, TOKEN, API_KEY, transport=transport)


class RecordingHandler:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, status_code=200, json=None, content=None):
        self.status_code = status_code
        self.json = json
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_mock_client():
    """Factory building a sync client over httpx.MockTransport."""
    opened = []

    def _make(handler, base_url=BASE_URL):
        transport = httpx.Client(transport=httpx.MockTransport(handler))
        opened.append(transport)
        return SkillsClient(base_url, TOKEN, API_KEY, transport=transport)

    yield _make

    for transport in opened:
        transport.close()


@pytest.fixture
def recorder():
    """Factory for RecordingHandler instances."""
    return RecordingHandler


class BrokenStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Response body that dies mid-transfer, counting how often it is closed."""

    def __init__(self, counts):
        self.counts = counts

    def __iter__(self):
        yield b'[{"name": "trunc'
        raise httpx.RemoteProtocolError("peer closed connection without sending complete message body")

    async def __aiter__(self):
        yield b'[{"name": "trunc'
        raise httpx.RemoteProtocolError("peer closed connection without sending complete message body")

    def close(self):
        self.counts["closed"] += 1

    async def aclose(self):
        self.counts["closed"] += 1


@pytest.fixture
def broken_server():
    """Handler whose responses are cut off, plus open/close counters."""
    counts = {"opened": 0, "closed": 0}

    def handler(request):
        counts["opened"] += 1
        return httpx.Response(200, stream=BrokenStream(counts))

    return handler, counts
