import json
import sys

import pytest
from loguru import logger

from mcfetch.models import EndpointConfig


class _FakeContent:
    def __init__(self, body: bytes, error=None):
        self._body = body
        self._error = error

    async def iter_chunked(self, size):
        for start in range(0, len(self._body), size):
            yield self._body[start:start + size]
        if self._error is not None:
            raise self._error


class FakeResponse:
    def __init__(self, url, status=200, body=b"", headers=None, error=None, stream_error=None):
        self.url = url
        self.status = status
        self._body = body
        self.headers = headers if headers is not None else {"Content-Length": str(len(body))}
        self._error = error
        self.content = _FakeContent(body, stream_error)

    async def read(self):
        return self._body

    async def __aenter__(self):
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Routes GET requests to canned responses and records every call."""

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.closed = False

    def add(self, url, body=b"", status=200, headers=None, error=None, stream_error=None):
        self.routes[url] = dict(
            body=body, status=status, headers=headers, error=error, stream_error=stream_error
        )
        return self

    def add_json(self, url, document, status=200):
        return self.add(url, json.dumps(document).encode("utf-8"), status=status)

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(url, status=404, body=b"not found")
        return FakeResponse(url, **route)

    @property
    def urls(self):
        return [url for url, _ in self.requests]

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def manifest_document():
    return {
        "latest": {"release": "1.18.2", "snapshot": "22w16b"},
        "versions": [
            {"id": "22w16b", "type": "snapshot", "url": "https://example/22w16b.json"},
            {"id": "1.18.2", "type": "release", "url": "https://example/meta.json"},
            {"id": "1.18.1", "type": "release", "url": "https://example/1.18.1.json"},
        ],
    }


@pytest.fixture
def promotions_document():
    return {
        "homepage": "https://files.minecraftforge.net/net/minecraftforge/forge/",
        "promos": {
            "1.18.2-latest": "40.1.80",
            "1.18.2-recommended": "40.2.0",
            "1.17.1-latest": "37.1.1",
        },
    }


@pytest.fixture
def endpoints():
    return EndpointConfig()


@pytest.fixture
def server_bytes():
    return b"pretend this is a server jar" * 64


@pytest.fixture
def installer_bytes():
    return b"pretend this is a forge installer" * 64


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    # the CLI rebinds loguru to the runner's stderr
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
