"""
Collection Loader

Drives the upstream client across every page of a collection and returns
the concatenated items as one fully materialized list.

Failure semantics differ from name search: a 404 on the first page means
the collection is empty, but any failure after that (including a 404 on a
page upstream itself pointed us to) aborts the whole load. No partial
collections are ever returned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Type

from ..core.errors import UpstreamError
from .client import PageResult, RickAndMortyClient
from .models import Character, ItemT

logger = logging.getLogger("rmapi.loader")


async def load_all(
    client: RickAndMortyClient,
    collection: str,
    model: Type[ItemT],
    concurrency: int = 1,
) -> List[ItemT]:
    """
    Load every item of ``collection``.

    Parameters
    ----------
    client : RickAndMortyClient
        Open upstream client.

    collection : str
        Upstream collection path.

    model : Type[ItemT]
        Item schema for validation.

    concurrency : int
        1 walks the ``next`` cursors one page at a time. Larger values fetch
        pages 2..N by page number, at most ``concurrency`` in flight.

    Returns
    -------
    List[ItemT]
        All items in page order. Not deduplicated.

    Raises
    ------
    UpstreamError
        If any page after the first cannot be fetched.
    """
    first = await client.fetch_page(collection, model)
    if not first.found:
        logger.info("Collection %s not found upstream; treating as empty", collection)
        return []

    if concurrency > 1 and first.total_pages > 1:
        rest = await _fetch_numbered_pages(
            client, collection, model, first.total_pages, concurrency
        )
    else:
        rest = await _follow_cursors(client, collection, model, first)

    items: List[ItemT] = list(first.items)
    for page in rest:
        items.extend(page.items)

    logger.info(
        "Loaded %d %s items across %d pages",
        len(items),
        collection,
        len(rest) + 1,
    )
    return items


async def load_all_characters(
    client: RickAndMortyClient,
    concurrency: int = 1,
) -> List[Character]:
    return await load_all(client, "character", Character, concurrency=concurrency)


# ---------------------------------------------------------------------
# Page Walkers
# ---------------------------------------------------------------------

def _require_found(result: PageResult, collection: str, where: str) -> PageResult:
    if not result.found:
        raise UpstreamError(collection, f"page {where} vanished (404) mid-load", status_code=404)
    return result


async def _follow_cursors(
    client: RickAndMortyClient,
    collection: str,
    model: Type[ItemT],
    first: PageResult[ItemT],
) -> List[PageResult[ItemT]]:
    pages: List[PageResult[ItemT]] = []
    seen = set()
    cursor = first.next_cursor

    while cursor:
        # Guard against an upstream cursor cycle
        if cursor in seen:
            raise UpstreamError(collection, f"pagination cycle at {cursor}")
        seen.add(cursor)

        page = _require_found(
            await client.fetch_page(collection, model, cursor=cursor),
            collection,
            cursor,
        )
        pages.append(page)
        cursor = page.next_cursor

    return pages


async def _fetch_numbered_pages(
    client: RickAndMortyClient,
    collection: str,
    model: Type[ItemT],
    total_pages: int,
    concurrency: int,
) -> List[PageResult[ItemT]]:
    semaphore = asyncio.Semaphore(concurrency)

    async def _fetch(number: int) -> PageResult[ItemT]:
        async with semaphore:
            result = await client.fetch_page(collection, model, page=number)
        return _require_found(result, collection, str(number))

    tasks = [
        asyncio.create_task(_fetch(n)) for n in range(2, total_pages + 1)
    ]
    try:
        # gather preserves argument order, so pages come back in page order
        return list(await asyncio.gather(*tasks))
    finally:
        # One failed page fails the load; nothing may outlive it
        pending = [t for t in tasks if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info(
                "Cancelled %d outstanding %s page fetches", len(pending), collection
            )
