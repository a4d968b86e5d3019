"""
Benchmark service.

Resolves the team list for a region/season and runs the fan-out
aggregator over each team's team_year record.
"""

import logging
import math
from typing import Iterable, Optional

from app.features.statbotics import RegionFilter, StatboticsClient

from .aggregator import FanOutAggregator
from .metrics import Metric
from .models import AggregationResult, EmptyInputSetError

logger = logging.getLogger(__name__)


def extract_team_numbers(teams: object) -> list[int]:
    """Team numbers from a /v3/teams response, skipping malformed rows."""
    if not isinstance(teams, list):
        return []
    numbers = []
    for row in teams:
        team = row.get("team") if isinstance(row, dict) else None
        if isinstance(team, bool):
            continue
        if isinstance(team, int):
            numbers.append(team)
        elif isinstance(team, float) and math.isfinite(team):
            numbers.append(int(team))
    return numbers


class BenchmarkService:
    """EPA benchmarks by region."""

    def __init__(self, client: StatboticsClient):
        self.client = client

    async def epa_benchmarks(
        self,
        year: int,
        metric: Metric,
        ranks: Iterable[float],
        region: RegionFilter,
        max_teams: Optional[int] = None,
        concurrency: Optional[int] = None,
    ) -> AggregationResult:
        """
        Percentiles of `metric` across all teams of a region in `year`.

        Raises:
            EmptyInputSetError: region/year has no teams
            NoExtractableValuesError: no team had a value for the metric
            UpstreamError: the team list itself could not be fetched
        """
        teams = await self.client.list_teams(year=year, **region.as_params())
        team_numbers = extract_team_numbers(teams)
        if not team_numbers:
            raise EmptyInputSetError("No teams returned for this region/year")

        logger.info(
            f"Benchmarking {metric.value} for {year}: {len(team_numbers)} teams "
            f"(region={region.as_params()})"
        )

        aggregator = FanOutAggregator(
            self.client,
            concurrency=concurrency,
            max_identifiers=max_teams,
        )
        return await aggregator.aggregate(
            team_numbers,
            metric,
            ranks,
            path_for=lambda team: f"/v3/team_year/{team}/{year}",
        )
