"""
Top Pairs Routes

Ranks character pairs by the number of episodes they share. The whole
character collection is loaded on every request; any upstream failure
while loading fails the request with a 500.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool
from typing import List, Annotated, Optional

from .models import ErrorResponse, TopPairResult
from .params import parse_non_negative_int, parse_positive_int
from .dependencies import get_upstream_client
from ..config import settings
from ..pairs.engine import compute_pairs
from ..upstream.client import RickAndMortyClient
from ..upstream.loader import load_all_characters

router = APIRouter(tags=["pairs"])


@router.get(
    "/top-pairs",
    response_model=List[TopPairResult],
    summary="Rank character pairs by shared episode count",
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def top_pairs(
    client: Annotated[RickAndMortyClient, Depends(get_upstream_client)],
    min_raw: Annotated[Optional[str], Query(alias="min")] = None,
    max_raw: Annotated[Optional[str], Query(alias="max")] = None,
    limit: Annotated[Optional[str], Query()] = None,
) -> List[TopPairResult]:
    """
    Return the top character pairs by shared episodes.

    Parameters
    ----------
    min : Optional[str]
        Inclusive lower bound on shared episodes (default 0).

    max : Optional[str]
        Inclusive upper bound (default unbounded).

    limit : Optional[str]
        Maximum pairs returned (default from settings, normally 20).
    """
    min_shared = parse_non_negative_int("min", min_raw, default=0)
    max_shared = parse_non_negative_int("max", max_raw, default=None)
    max_pairs = parse_positive_int("limit", limit, default=settings.default_pairs_limit)

    characters = await load_all_characters(
        client, concurrency=settings.loader_concurrency
    )
    # Quadratic in the cast size; keep it off the event loop
    pairs = await run_in_threadpool(
        compute_pairs,
        characters,
        min_shared=min_shared,
        max_shared=max_shared,
        limit=max_pairs,
    )
    return [TopPairResult.from_pair(p) for p in pairs]
