"""
Bookmark source endpoint.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Query, Response

from core import http

from . import repository, service

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

router = APIRouter()


@router.get("/bookmarks")
async def get_bookmarks(
    force: str | None = Query(default=None),
    url: str | None = Query(default=None),
    store: repository.CacheStore = Depends(repository.get_cache_store),
    client: httpx.AsyncClient = Depends(http.get_client),
) -> Response:
    """
    Return the bookmark source body, cached or freshly fetched.

    `force=yes` skips the cache; `url` is only needed when fetching.
    """
    body = await service.serve(
        force_refresh=service.is_force_refresh(force),
        source_url=url,
        store=store,
        client=client,
    )
    # Declared as JSON whether or not the upstream body actually is.
    return Response(content=body, status_code=200, media_type=JSON_CONTENT_TYPE)
