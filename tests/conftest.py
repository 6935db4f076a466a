"""
Shared fixtures: an in-process fake of the upstream API served through
httpx.MockTransport, and a TestClient wired to it.
"""

from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from rm_aggregator.main import app
from rm_aggregator.api.dependencies import get_upstream_client
from rm_aggregator.upstream.client import RickAndMortyClient

BASE_URL = "https://upstream.test/api"


def episode_ref(n: int) -> str:
    return f"{BASE_URL}/episode/{n}"


def character_json(char_id: int, name: str, episodes: List[int]) -> Dict[str, Any]:
    return {
        "id": char_id,
        "name": name,
        "status": "Alive",
        "species": "Human",
        "url": f"{BASE_URL}/character/{char_id}",
        "episode": [episode_ref(e) for e in episodes],
    }


def named_json(collection: str, item_id: int, name: str) -> Dict[str, Any]:
    return {"id": item_id, "name": name, "url": f"{BASE_URL}/{collection}/{item_id}"}


def page_json(
    results: List[Dict[str, Any]],
    next_url: Optional[str] = None,
    pages: int = 1,
    count: Optional[int] = None,
) -> Dict[str, Any]:
    return {
        "info": {
            "count": len(results) if count is None else count,
            "pages": pages,
            "next": next_url,
            "prev": None,
        },
        "results": results,
    }


class FakeUpstream:
    """
    Minimal stand-in for the Rick and Morty API.

    - ``characters`` is served paginated, ``page_size`` per page.
    - ``search_results[collection]`` answers ``?name=`` queries; a missing
      entry is a 404, an int is returned as that bare status code.
    - ``page_status[n]`` overrides the response for character page ``n``.
    """

    def __init__(self, page_size: int = 2) -> None:
        self.page_size = page_size
        self.characters: List[Dict[str, Any]] = []
        self.search_results: Dict[str, Any] = {}
        self.page_status: Dict[int, int] = {}
        self.requests: List[httpx.Request] = []

    @property
    def total_pages(self) -> int:
        return max(1, -(-len(self.characters) // self.page_size))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        collection = request.url.path.strip("/").split("/")[-1]
        params = request.url.params

        if "name" in params:
            canned = self.search_results.get(collection)
            if canned is None:
                return httpx.Response(404, json={"error": "There is nothing here"})
            if isinstance(canned, int):
                return httpx.Response(canned)
            return httpx.Response(200, json=page_json(canned))

        if collection != "character" or not self.characters:
            return httpx.Response(404, json={"error": "There is nothing here"})

        page = int(params.get("page", "1"))
        if page in self.page_status:
            return httpx.Response(self.page_status[page])

        start = (page - 1) * self.page_size
        chunk = self.characters[start:start + self.page_size]
        if not chunk:
            return httpx.Response(404, json={"error": "There is nothing here"})
        next_url = (
            f"{BASE_URL}/character/?page={page + 1}" if page < self.total_pages else None
        )
        return httpx.Response(
            200,
            json=page_json(
                chunk, next_url=next_url, pages=self.total_pages, count=len(self.characters)
            ),
        )

    def client(self) -> RickAndMortyClient:
        return RickAndMortyClient(BASE_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_upstream():
    return FakeUpstream()


@pytest.fixture
def client(fake_upstream):
    async def _get_client():
        async with fake_upstream.client() as upstream:
            yield upstream

    app.dependency_overrides[get_upstream_client] = _get_client

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides = {}
