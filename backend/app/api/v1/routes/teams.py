"""
Team Routes

Team snapshots, team-year snapshots, recent seasons and team lists.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from app.api.deps import get_statbotics_client, upstream_http_error, with_default_region
from app.features.statbotics import StatboticsClient, UpstreamError
from app.features.teams import TeamService

router = APIRouter()


@router.get("/team/{team}")
async def get_team(
    team: str,
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """Team snapshot (Statbotics /v3/team/{team})."""
    try:
        return await client.get_team(team)
    except UpstreamError as e:
        raise upstream_http_error(e, "team lookup failed")


@router.get("/team/{team}/year/{year}")
async def get_team_year(
    team: str,
    year: int,
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """Team-year snapshot (Statbotics /v3/team_year/{team}/{year})."""
    try:
        return await client.get_team_year(team, year)
    except UpstreamError as e:
        raise upstream_http_error(e, "team-year lookup failed")


@router.get("/team/{team}/years")
async def get_team_years(
    team: int,
    n: int = Query(default=4),
    end_year: Optional[int] = Query(default=None, alias="endYear"),
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """
    Last N seasons for a team (default: last 4 including current year).

    2021 is skipped (no FRC season). Seasons that fail upstream are
    reported inline with an error instead of failing the request.
    """
    if n < 1 or n > 10:
        raise HTTPException(status_code=400, detail="n must be between 1 and 10")
    if end_year is None:
        end_year = date.today().year
    if end_year < 1992 or end_year > 2100:
        raise HTTPException(status_code=400, detail="endYear must be a valid year")

    service = TeamService(client)
    seasons = await service.seasons(team, n, end_year)
    return {"team": team, "endYear": end_year, "n": n, "seasons": seasons}


@router.get("/teams")
async def list_teams(
    request: Request,
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """
    List teams with region filters (defaults to district=pnw if none provided).

    All query parameters are forwarded to Statbotics /v3/teams.
    """
    try:
        return await client.list_teams(with_default_region(request.query_params))
    except UpstreamError as e:
        raise upstream_http_error(e, "teams query failed")
