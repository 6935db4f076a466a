"""
Error Types and Global Error Handling

This module defines the service's exception taxonomy and the application-wide
exception handlers that turn those exceptions into HTTP responses.

Design Goals
------------
- Never leak internal exception details to clients
- Always return deterministic, machine-readable error responses
- Log full stack traces internally for debugging
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("rmapi.errors")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class UpstreamError(RuntimeError):
    """
    Raised when the upstream API cannot produce a usable page.

    Covers transport failures, timeouts, non-success statuses other than
    404, undecodable bodies and payloads that fail schema validation.
    """

    def __init__(
        self,
        collection: str,
        description: str,
        status_code: Optional[int] = None,
    ) -> None:
        self.collection = collection
        self.description = description
        self.status_code = status_code
        super().__init__(f"Failed to fetch {collection}: {description}")


class QueryParameterError(ValueError):
    """Raised when a query parameter is missing or malformed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def query_parameter_error_handler(
    request: Request,
    exc: QueryParameterError,
) -> JSONResponse:
    """
    Map a rejected query parameter to a 400 response.

    Validation happens before any upstream call, so there is nothing to
    clean up here.
    """
    logger.info(
        "Rejected request %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
    )
    return JSONResponse(status_code=400, content={"error": exc.message})


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    Behavior
    --------
    - Logs the full exception stack trace for internal diagnostics.
    - Returns a generic 500 error to the client with no internal details.

    Parameters
    ----------
    request : Request
        The incoming HTTP request that triggered the exception.

    exc : Exception
        The uncaught exception instance.

    Returns
    -------
    JSONResponse
        A JSON 500 response with a minimal error payload.
    """

    # Log full traceback internally (never returned to client)
    logger.error(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, str] = {"error": "Internal server error"}

    return JSONResponse(
        status_code=500,
        content=payload,
    )


async def upstream_error_handler(
    request: Request,
    exc: UpstreamError,
) -> JSONResponse:
    """
    Map an upstream failure that escaped to the route level to a 500.

    Only the ranking path lets these escape; search downgrades them per
    collection before they get here.
    """
    logger.error(
        "Upstream failure during request %s %s: %s (status=%s)",
        request.method,
        request.url.path,
        exc,
        exc.status_code,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )
