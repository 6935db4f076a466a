"""
Search Routes

Cross-collection name search. Upstream failures for individual collections
are absorbed by the aggregator, so this route only fails on bad input or
unexpected errors.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import List, Annotated, Optional

from .models import ErrorResponse, SearchResultItem
from .params import parse_positive_int, require_term
from .dependencies import get_upstream_client
from ..search.aggregator import search_all
from ..upstream.client import RickAndMortyClient

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    response_model=List[SearchResultItem],
    summary="Search characters, locations and episodes by name",
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def search(
    client: Annotated[RickAndMortyClient, Depends(get_upstream_client)],
    term: Annotated[Optional[str], Query()] = None,
    limit: Annotated[Optional[str], Query()] = None,
) -> List[SearchResultItem]:
    """
    Search all three collections for ``term``.

    Parameters
    ----------
    term : str
        Required, non-empty name filter.

    limit : Optional[str]
        Optional positive integer cap on the merged results.

    Returns
    -------
    List[SearchResultItem]
        Characters, then locations, then episodes.
    """
    search_term = require_term(term)
    max_results = parse_positive_int("limit", limit, default=None)

    return await search_all(client, search_term, limit=max_results)
