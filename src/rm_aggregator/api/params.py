"""
Query Parameter Parsing

Integer query parameters are parsed strictly: optional surrounding
whitespace, an optional leading ``+``, then decimal digits only. Anything
else (including values above MAX_QUERY_INT) is rejected with a
parameter-specific message before any upstream call is made.
"""

from __future__ import annotations

import re
from typing import Optional

from ..core.errors import QueryParameterError

MAX_QUERY_INT = 2**31 - 1

_INT_RE = re.compile(r"\+?[0-9]+")


def _parse_int(raw: str) -> Optional[int]:
    text = raw.strip()
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if value > MAX_QUERY_INT:
        return None
    return value


def parse_non_negative_int(name: str, raw: Optional[str], default: Optional[int]) -> Optional[int]:
    """Parse an optional non-negative integer, returning ``default`` when absent."""
    if raw is None:
        return default
    value = _parse_int(raw)
    if value is None:
        raise QueryParameterError(
            f"Query parameter '{name}' must be a non-negative integer"
        )
    return value


def parse_positive_int(name: str, raw: Optional[str], default: Optional[int]) -> Optional[int]:
    """Parse an optional positive integer, returning ``default`` when absent."""
    if raw is None:
        return default
    value = _parse_int(raw)
    if value is None or value <= 0:
        raise QueryParameterError(
            f"Query parameter '{name}' must be a positive integer"
        )
    return value


def require_term(raw: Optional[str]) -> str:
    if not raw:
        raise QueryParameterError("Missing 'term' query parameter")
    return raw
