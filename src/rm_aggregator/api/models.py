"""
API Models

Pydantic response schemas for the public HTTP endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..pairs.engine import CharacterPair
from ..search.aggregator import SearchResultItem


class CharacterRef(BaseModel):
    """Name and canonical URL of one side of a pair."""
    name: str
    url: str

    model_config = ConfigDict(extra="forbid")


class TopPairResult(BaseModel):
    """
    One ranked pair. ``character1`` is always the character with the
    smaller upstream id.
    """
    character1: CharacterRef
    character2: CharacterRef
    episodes: int = Field(..., ge=1)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_pair(cls, pair: CharacterPair) -> "TopPairResult":
        return cls(
            character1=CharacterRef(name=pair.left.name, url=pair.left.url),
            character2=CharacterRef(name=pair.right.name, url=pair.right.url),
            episodes=pair.shared_episode_count,
        )


class ErrorResponse(BaseModel):
    error: str

    model_config = ConfigDict(extra="forbid")


class HealthResponse(BaseModel):
    status: str
    upstream: str


__all__ = [
    "CharacterRef",
    "TopPairResult",
    "ErrorResponse",
    "HealthResponse",
    "SearchResultItem",
]
