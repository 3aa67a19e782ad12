"""
Gist bookmark endpoint.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends

from core import config, http

from . import schemas, service

router = APIRouter()


@router.get("/gists")
async def get_gists(
    token: str = Depends(config.github_token),
    client: httpx.AsyncClient = Depends(http.get_client),
) -> dict:
    bookmarks = await service.fetch_bookmarks(token=token, client=client)
    return schemas.GistsResponse(gists=bookmarks).model_dump(by_alias=True)
