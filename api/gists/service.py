"""
Gist bookmarks: fetch the user's gists and keep the ones that hold bookmarks.

A gist counts as a bookmark set when its description mentions a bookmark
marker and it carries at least one JSON file. Each such gist yields one
bookmark pointing at the raw URL of that JSON file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

import httpx
from fastapi import HTTPException, status
from pydantic import ValidationError

from core import http

from . import schemas

GISTS_URL = "https://api.github.com/gists"
GITHUB_ACCEPT = "application/vnd.github+json"
SOURCE_NAME = "GitHub API"

# Case-sensitive substrings; "ブックマーク" is "bookmark" in Japanese.
BOOKMARK_MARKERS = ("bookmark", "ブックマーク")
JSON_MEDIA_TYPE = "application/json"

logger = logging.getLogger(__name__)


def is_bookmark_description(description: str | None) -> bool:
    desc = description or ""
    return any(marker in desc for marker in BOOKMARK_MARKERS)


def select_json_attachment(files: Mapping[str, schemas.GistFile]) -> schemas.GistFile | None:
    """
    First file whose media type is exactly application/json.

    "First" follows the mapping's insertion order, which is the order the
    upstream JSON listed the files in.
    """
    for gist_file in files.values():
        if gist_file.media_type == JSON_MEDIA_TYPE:
            return gist_file
    return None


def normalize(gists: Iterable[schemas.Gist]) -> list[schemas.GistBookmark]:
    bookmarks: list[schemas.GistBookmark] = []
    for gist in gists:
        if not is_bookmark_description(gist.description):
            continue

        target = select_json_attachment(gist.files)
        if target is None:
            continue

        bookmarks.append(
            schemas.GistBookmark(
                title=target.filename,
                url=target.raw_url,
                html_url=gist.html_url,
            )
        )
    return bookmarks


def _decode_gists(payload: bytes) -> list[schemas.Gist]:
    try:
        return schemas.GIST_LIST.validate_json(payload)
    except ValidationError as exc:
        logger.warning("gists_decode_failed errors=%s", exc.error_count())
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"{SOURCE_NAME} returned an unexpected payload.",
        ) from exc


async def fetch_bookmarks(*, token: str, client: httpx.AsyncClient) -> list[schemas.GistBookmark]:
    """
    List the authenticated user's gists and return their bookmarks.
    """
    try:
        resp = await client.get(
            GISTS_URL,
            headers={
                "Authorization": f"Bearer {token}",
                "User-Agent": http.USER_AGENT,
                "Accept": GITHUB_ACCEPT,
            },
        )
    except http.REQUEST_ERRORS as exc:
        logger.warning("gists_unreachable error=%s", type(exc).__name__)
        raise http.transport_error(source=SOURCE_NAME) from exc

    if not resp.is_success:
        logger.warning("gists_request_failed status=%s", resp.status_code)
        raise http.upstream_error(resp, source=SOURCE_NAME)

    gists = _decode_gists(resp.content)
    bookmarks = normalize(gists)
    logger.info("gists_normalized gists=%s bookmarks=%s", len(gists), len(bookmarks))
    return bookmarks
