from typing import AsyncIterator

from ..config import settings
from ..upstream.client import RickAndMortyClient


async def get_upstream_client() -> AsyncIterator[RickAndMortyClient]:
    """
    Yield a request-scoped upstream client.

    The client (and its connection pool) is closed once the response has
    been produced; nothing is shared between requests.
    """
    async with RickAndMortyClient(
        base_url=str(settings.upstream_base_url),
        timeout=settings.upstream_timeout,
    ) as client:
        yield client
