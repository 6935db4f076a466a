"""
Upstream Data Models

Pydantic schemas for the JSON returned by the Rick and Morty API. Every
page is validated here, at the client boundary, so malformed upstream data
fails fast instead of reaching the pair engine.
"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


_UPSTREAM_CONFIG = ConfigDict(
    extra="ignore",          # Upstream carries many fields we never read
    frozen=True,
    populate_by_name=True,
)


class PageInfo(BaseModel):
    """Pagination envelope metadata."""

    count: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)
    next: Optional[str] = None
    prev: Optional[str] = None

    model_config = _UPSTREAM_CONFIG


class Character(BaseModel):
    """
    A character as fetched from the ``character`` collection.

    ``episodes`` holds opaque episode references (URLs upstream); they are
    only ever compared for set membership.
    """

    id: int
    name: str
    url: str
    episodes: List[str] = Field(default_factory=list, alias="episode")

    model_config = _UPSTREAM_CONFIG


class Location(BaseModel):
    id: int
    name: str
    url: str
    type: Optional[str] = None
    dimension: Optional[str] = None

    model_config = _UPSTREAM_CONFIG


class Episode(BaseModel):
    id: int
    name: str
    url: str
    air_date: Optional[str] = None
    code: Optional[str] = Field(default=None, alias="episode")

    model_config = _UPSTREAM_CONFIG


ItemT = TypeVar("ItemT", bound=BaseModel)


class Page(BaseModel, Generic[ItemT]):
    """One upstream page: ``{"info": {...}, "results": [...]}``."""

    info: PageInfo
    results: List[ItemT] = Field(default_factory=list)

    model_config = _UPSTREAM_CONFIG


# Collection name -> item schema
COLLECTION_MODELS = {
    "character": Character,
    "location": Location,
    "episode": Episode,
}
