"""Shared fixtures: an in-memory session store and a gateway client wired to a fake backend."""

import json

import httpx
import pytest

from core.api.client import ApiClient
from core.api.session_store import MemorySessionStore

BASE_URL = "https://backend.example.com/api/v1"


class FakeBackend:
    """Records every request and answers with a queued or default response."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def queue(self, status_code=200, body=None, content=None, exc=None):
        """Queue one response (or an exception class to raise) for the next request."""
        self.responses.append((status_code, body, content, exc))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(200, json=envelope())
        status_code, body, content, exc = self.responses.pop(0)
        if exc is not None:
            raise exc("backend unreachable", request=request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


def envelope(data=None, status=200, success=True, message="OK"):
    return {"success": success, "status": status, "message": message, "data": data}


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def client(backend, store):
    http = httpx.Client(transport=httpx.MockTransport(backend))
    api = ApiClient(BASE_URL, store, http_client=http)
    yield api
    api.close()
