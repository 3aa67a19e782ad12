"""
Pydantic schemas for the gists API (upstream records and our response).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class GistFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    # Upstream calls the media type "type".
    media_type: str = Field(..., alias="type")
    language: str | None = None
    raw_url: str
    size: int


class Gist(BaseModel):
    description: str | None = None
    # Keyed by filename, in the order the upstream JSON lists them.
    files: dict[str, GistFile] = Field(default_factory=dict)
    html_url: str


class GistBookmark(BaseModel):
    title: str
    url: str
    html_url: str = Field(..., serialization_alias="htmlUrl")


class GistsResponse(BaseModel):
    gists: list[GistBookmark]


GIST_LIST = TypeAdapter(list[Gist])
