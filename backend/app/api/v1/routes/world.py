"""
World Routes

Global rankings served from a single upstream list call.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_statbotics_client, upstream_http_error
from app.features.statbotics import StatboticsClient, UpstreamError
from app.features.teams import TeamService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/world/top")
async def world_top(
    year: int,
    limit: int = Query(default=1),
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """Global top team(s) by unitless EPA, sorted upstream (no scan)."""
    if limit < 1 or limit > 10:
        raise HTTPException(status_code=400, detail="limit must be between 1 and 10")

    try:
        top = await TeamService(client).world_top(year, limit)
    except UpstreamError as e:
        raise upstream_http_error(e, "world top lookup failed")

    if not top:
        logger.error(f"World top {year}: upstream returned no team_years")
        raise HTTPException(
            status_code=502,
            detail="Upstream returned no results for /v3/team_years",
        )

    return {
        "year": year,
        "ranking_metric": "unitless_epa (descending)",
        "count": len(top),
        "top": top,
    }
