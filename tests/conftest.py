# tests/conftest.py
import httpx
import pytest

from bookmarks.repository import CacheStore
from core import http


class FakeUpstream:
    """
    Records outgoing requests and answers with a canned response.
    """

    def __init__(self, status_code=200, content=b"", exc=None):
        self.status_code = status_code
        self.content = content
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(f"simulated failure for {request.url}", request=request)
        return httpx.Response(self.status_code, content=self.content)

    def client(self) -> httpx.AsyncClient:
        return http.build_client(transport=httpx.MockTransport(self))


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / ".cache" / "bookmarks.json"


@pytest.fixture
def cache_store(cache_path):
    return CacheStore(cache_path)


@pytest.fixture
def upstream():
    return FakeUpstream(content=b'{"links": []}')
