"""
Cross-Collection Name Search

Fans a search term out to the character, location and episode collections
concurrently and merges the hits into one tagged list.

Each collection is isolated: an upstream failure for one collection is
logged and treated as "no hits" for that collection only. The merged order
is fixed by collection (characters, then locations, then episodes) and
never depends on which request finished first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from ..core.errors import UpstreamError
from ..upstream.client import RickAndMortyClient
from ..upstream.models import COLLECTION_MODELS

logger = logging.getLogger("rmapi.search")

ResourceType = Literal["character", "location", "episode"]

SEARCH_ORDER: tuple[ResourceType, ...] = ("character", "location", "episode")


class SearchResultItem(BaseModel):
    """A search hit, normalized across collections."""

    name: str
    type: ResourceType
    url: str

    model_config = ConfigDict(extra="forbid", frozen=True)


async def search_collection(
    client: RickAndMortyClient,
    collection: ResourceType,
    term: str,
) -> List[SearchResultItem]:
    """
    Search one collection by name.

    Returns an empty list when upstream has no matches or when the call
    fails; failures are logged, not raised.
    """
    model = COLLECTION_MODELS[collection]
    try:
        result = await client.search(collection, model, term)
    except UpstreamError as exc:
        logger.error("Error searching %s for %r: %s", collection, term, exc)
        return []

    return [
        SearchResultItem(name=item.name, type=collection, url=item.url)
        for item in result.items
    ]


async def search_all(
    client: RickAndMortyClient,
    term: str,
    limit: Optional[int] = None,
) -> List[SearchResultItem]:
    """
    Search every collection for ``term`` and merge the results.

    Parameters
    ----------
    client : RickAndMortyClient
        Open upstream client.

    term : str
        Non-empty name filter.

    limit : Optional[int]
        Cap on the merged result count; None returns everything.

    Returns
    -------
    List[SearchResultItem]
        Characters first, then locations, then episodes, truncated to
        ``limit``.
    """
    per_collection = await asyncio.gather(
        *(search_collection(client, collection, term) for collection in SEARCH_ORDER)
    )

    merged: List[SearchResultItem] = []
    for hits in per_collection:
        merged.extend(hits)

    if limit is not None:
        merged = merged[:limit]

    logger.debug("Search %r produced %d results", term, len(merged))
    return merged
