"""
Team summaries built from Statbotics team_year records.

- recent seasons for one team (for "last N years" comparisons)
- world top teams by unitless EPA
"""

import logging
from typing import Union

from app.features.benchmarks.metrics import summarize_team_year
from app.features.statbotics import StatboticsClient, UpstreamError

logger = logging.getLogger(__name__)

# Seasons without official FRC play
SKIPPED_SEASONS = frozenset({2021})


def recent_seasons(end_year: int, n: int) -> list[int]:
    """Last `n` played seasons up to and including end_year, newest first.

    recent_seasons(2023, 3) → [2023, 2022, 2020]
    """
    years = []
    year = end_year
    while len(years) < n:
        if year not in SKIPPED_SEASONS:
            years.append(year)
        year -= 1
    return years


class TeamService:
    """Read-only team lookups that reshape upstream data."""

    def __init__(self, client: StatboticsClient):
        self.client = client

    async def seasons(self, team: Union[int, str], n: int, end_year: int) -> list[dict]:
        """
        Summaries for the team's last `n` seasons, fetched one at a time.

        A season that fails (rookie year, missing data) is returned as
        {"team", "year", "error"} instead of failing the whole request.
        """
        results = []
        for year in recent_seasons(end_year, n):
            try:
                record = await self.client.get_team_year(team, year)
            except UpstreamError as e:
                logger.info(f"Team {team} season {year} unavailable: {e}")
                results.append({"team": _team_number(team), "year": year, "error": str(e)})
                continue

            summary = summarize_team_year(record if isinstance(record, dict) else {})
            results.append({
                "team": summary["team"],
                "year": summary["year"],
                "name": summary["name"],
                "district": summary["district"],
                "epa_points_mean": summary["epa_points_mean"],
                "epa_points_sd": summary["epa_points_sd"],
                "unitless_epa": summary["unitless_epa"],
                "norm_epa": summary["norm_epa"],
                "world_rank": summary["world_rank"],
            })
        return results

    async def world_top(self, year: int, limit: int) -> list[dict]:
        """Top `limit` team-years worldwide, ranked upstream by unitless EPA."""
        rows = await self.client.list_team_years(
            year=year,
            metric="unitless_epa",
            ascending="false",
            limit=limit,
        )
        if not isinstance(rows, list):
            return []
        top = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            summary = summarize_team_year(row)
            summary.pop("year")
            summary.pop("norm_epa")
            top.append(summary)
        return top


def _team_number(team: Union[int, str]) -> Union[int, str]:
    try:
        return int(team)
    except (TypeError, ValueError):
        return team
