"""Read-only search and shared-episode ranking service over the Rick and Morty API."""

__version__ = "1.0.0"
