"""
Upstream Package

Async client, schemas and the paginated collection loader for the public
Rick and Morty API.
"""

from .client import PageResult, RickAndMortyClient
from .loader import load_all, load_all_characters
from .models import COLLECTION_MODELS, Character, Episode, Location, Page, PageInfo

__all__ = [
    "PageResult",
    "RickAndMortyClient",
    "load_all",
    "load_all_characters",
    "COLLECTION_MODELS",
    "Character",
    "Episode",
    "Location",
    "Page",
    "PageInfo",
]
