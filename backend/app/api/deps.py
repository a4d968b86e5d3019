"""
Route dependencies.

The Statbotics client and event resolver are created once in the app
lifespan and stored on app.state; routes receive them via Depends.
"""

import logging
from typing import Mapping

from fastapi import HTTPException, Request

from app.features.events import EventResolver
from app.features.statbotics import (
    RegionFilter,
    StatboticsClient,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)


def get_statbotics_client(request: Request) -> StatboticsClient:
    """Dependency for the shared Statbotics client."""
    return request.app.state.statbotics


def get_event_resolver(request: Request) -> EventResolver:
    """Dependency for the event resolver (alias table loaded at startup)."""
    return request.app.state.event_resolver


def with_default_region(query: Mapping[str, str]) -> dict[str, str]:
    """Copy of the query with district=pnw unless a region was given."""
    params = dict(query)
    region = RegionFilter(
        district=params.get("district"),
        state=params.get("state"),
        country=params.get("country"),
    ).with_default()
    for key, value in region.as_params().items():
        if value:
            params[key] = value
    return params


def upstream_http_error(error: UpstreamError, message: str) -> HTTPException:
    """Translate an upstream failure into an HTTP error for the caller."""
    if isinstance(error, UpstreamStatusError):
        status_code = error.status_code
    elif isinstance(error, UpstreamTimeoutError):
        status_code = 504
    else:
        status_code = 502
    if status_code >= 500:
        logger.error(f"{message}: {error}")
    else:
        logger.warning(f"{message}: {error}")
    return HTTPException(
        status_code=status_code,
        detail={"error": message, "detail": str(error)},
    )
