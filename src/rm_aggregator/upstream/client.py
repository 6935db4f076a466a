"""
Rick and Morty API Client

Thin async client over the public Rick and Morty REST API. One logical call
fetches one page of one collection, optionally filtered by name, or the page
behind an upstream-provided cursor.

Design Goals
------------
- "Not found" is an explicit result, never an exception
- Every other failure surfaces as a single exception type (UpstreamError)
- Response bodies are schema-validated before they leave this module
- One httpx.AsyncClient per request scope, closed by the caller
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Type

import httpx
from pydantic import ValidationError

from ..core.errors import UpstreamError
from .models import ItemT, Page, PageInfo

logger = logging.getLogger("rmapi.upstream")


# ---------------------------------------------------------------------
# Result Variant
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class PageResult(Generic[ItemT]):
    """
    Outcome of a single page fetch.

    ``found`` is False when upstream answered 404, which the API uses to say
    "no matches". In that case ``items`` is empty and there is no cursor.
    """

    found: bool
    items: List[ItemT] = field(default_factory=list)
    info: Optional[PageInfo] = None

    @classmethod
    def not_found(cls) -> "PageResult[ItemT]":
        return cls(found=False)

    @property
    def next_cursor(self) -> Optional[str]:
        return self.info.next if self.info else None

    @property
    def total_pages(self) -> int:
        return self.info.pages if self.info else 0


# ---------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------

class RickAndMortyClient:
    """
    Async client for the upstream API.

    Use as an async context manager; the underlying connection pool lives
    only as long as the ``async with`` block.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Parameters
        ----------
        base_url : str
            API root, e.g. ``https://rickandmortyapi.com/api``.

        timeout : float
            Per-call timeout in seconds. A timed-out call is an UpstreamError.

        transport : Optional[httpx.AsyncBaseTransport]
            Testing override (e.g. ``httpx.MockTransport``).
        """
        self.base_url = str(base_url).rstrip("/")
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "RickAndMortyClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_page(
        self,
        collection: str,
        model: Type[ItemT],
        *,
        name: Optional[str] = None,
        page: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> PageResult[ItemT]:
        """
        Fetch one page of a collection.

        Parameters
        ----------
        collection : str
            Upstream collection path: ``character``, ``location`` or
            ``episode``.

        model : Type[ItemT]
            Item schema the page's ``results`` are validated against.

        name : Optional[str]
            Name filter (upstream matches case-insensitive substrings).

        page : Optional[int]
            1-based page number.

        cursor : Optional[str]
            A ``next`` link taken from a previous page. When given, ``name``
            and ``page`` are ignored since the cursor already encodes them.

        Returns
        -------
        PageResult[ItemT]
            ``found=False`` on upstream 404, otherwise the validated page.

        Raises
        ------
        UpstreamError
            On transport failure, timeout, any non-404 error status,
            undecodable JSON or a schema violation.
        """
        if cursor:
            url, params = cursor, None
        else:
            url = f"{self.base_url}/{collection}/"
            params = {}
            if name is not None:
                params["name"] = name
            if page is not None:
                params["page"] = page

        try:
            resp = await self._http.get(url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                collection, f"{type(exc).__name__}: {exc}"
            ) from exc

        if resp.status_code == 404:
            logger.debug("No %s matches at %s", collection, resp.url)
            return PageResult.not_found()

        if not resp.is_success:
            raise UpstreamError(
                collection,
                resp.reason_phrase or f"HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(
                collection, "response body is not valid JSON",
                status_code=resp.status_code,
            ) from exc

        try:
            parsed = Page[model].model_validate(data)
        except ValidationError as exc:
            raise UpstreamError(
                collection,
                f"malformed page ({exc.error_count()} validation errors)",
                status_code=resp.status_code,
            ) from exc

        return PageResult(found=True, items=list(parsed.results), info=parsed.info)

    async def search(
        self,
        collection: str,
        model: Type[ItemT],
        term: str,
    ) -> PageResult[ItemT]:
        """Fetch the first page of ``collection`` items whose name matches ``term``."""
        return await self.fetch_page(collection, model, name=term)
