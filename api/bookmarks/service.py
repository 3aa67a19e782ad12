"""
Bookmark source proxy (read-through cache).

Flow:
1) Unless a refresh is forced, answer from the cache slot when it is filled
2) Otherwise fetch the caller-supplied URL
3) Store the fetched body (best-effort) and return it unchanged

The body is never parsed here; it is passed through as bytes.
"""

from __future__ import annotations

import logging

import httpx
from fastapi import HTTPException, status

from core import http

from .repository import CacheStore, CacheStoreError

SOURCE_NAME = "Bookmark source"

logger = logging.getLogger(__name__)


def is_force_refresh(force: str | None) -> bool:
    # Only the literal "yes" forces a refetch.
    return force == "yes"


async def _load_cached(store: CacheStore) -> bytes | None:
    try:
        return await store.load()
    except CacheStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Cache I/O error.",
        ) from exc


async def _fetch_source(client: httpx.AsyncClient, url: str) -> bytes:
    try:
        resp = await client.get(url, headers={"User-Agent": http.USER_AGENT})
    except http.REQUEST_ERRORS as exc:
        logger.warning("bookmark_source_unreachable error=%s", type(exc).__name__)
        raise http.transport_error(source=SOURCE_NAME) from exc

    if not resp.is_success:
        logger.warning("bookmark_source_failed status=%s", resp.status_code)
        raise http.upstream_error(resp, source=SOURCE_NAME)

    return resp.content


async def _store_best_effort(store: CacheStore, payload: bytes) -> bool:
    """
    Try to persist `payload`. Returns whether the write succeeded.

    Failures are logged and reported through the return value only.
    """
    try:
        await store.store(payload)
    except CacheStoreError:
        logger.warning("bookmark_cache_write_failed bytes=%s", len(payload), exc_info=True)
        return False
    return True


async def serve(
    *,
    force_refresh: bool,
    source_url: str | None,
    store: CacheStore,
    client: httpx.AsyncClient,
) -> bytes:
    """
    Return the bookmark source body, from the cache slot or from `source_url`.
    """
    if not force_refresh:
        cached = await _load_cached(store)
        if cached is not None:
            logger.debug("bookmark_cache_hit bytes=%s", len(cached))
            return cached

    url = (source_url or "").strip()
    if not url:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="url is required when the cache is empty.",
        )

    body = await _fetch_source(client, url)

    # The write outcome never changes what the caller gets back.
    stored = await _store_best_effort(store, body)

    logger.info(
        "bookmark_source_fetched bytes=%s forced=%s cached=%s",
        len(body),
        force_refresh,
        stored,
    )
    return body
