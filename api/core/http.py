"""
Outbound HTTP helpers (httpx).

This module owns the shared `httpx.AsyncClient`. FastAPI opens it on startup
and closes it on shutdown (see `api/main.py`), the same way a connection
pool would be handled.

Upstream failures are turned into `HTTPException`s that carry the upstream
status code and a short summary. Upstream bodies are never forwarded.
"""

from __future__ import annotations

import httpx
from fastapi import HTTPException, status

from . import config

USER_AGENT = "private_start_page/0.1"

# httpx.InvalidURL is not an HTTPError; both mean no response was received.
REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL)

_client: httpx.AsyncClient | None = None


def build_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        timeout=httpx.Timeout(config.upstream_timeout_s()),
        follow_redirects=True,
        transport=transport,
    )


async def init_client() -> None:
    global _client
    if _client is not None:
        return None
    _client = build_client()


async def close_client() -> None:
    global _client
    if _client is None:
        return None
    await _client.aclose()
    _client = None


def client() -> httpx.AsyncClient:
    if _client is None:
        raise RuntimeError("HTTP client is not initialized. Call init_client() on startup.")
    return _client


def get_client() -> httpx.AsyncClient:
    """
    FastAPI dependency returning the shared client.
    """
    return client()


def upstream_error(resp: httpx.Response, *, source: str) -> HTTPException:
    """
    Map a non-2xx upstream response to the same status for our caller.
    """
    return HTTPException(
        status_code=resp.status_code,
        detail=f"{source} error: {resp.status_code}",
    )


def transport_error(*, source: str) -> HTTPException:
    """
    Map a failure that produced no upstream response (unreachable host,
    unusable URL). There is no upstream status to forward, so answer 502.
    """
    code = status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=f"{source} HTTP error: {code}")
