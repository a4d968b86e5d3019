"""
Benchmark Routes

Regional EPA percentiles computed from per-team team_year records.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from app.api.deps import get_statbotics_client, upstream_http_error
from app.config import settings
from app.features.benchmarks import (
    BenchmarkService,
    EmptyInputSetError,
    Metric,
    NoExtractableValuesError,
    UnknownMetricError,
    format_rank,
    parse_ranks,
)
from app.features.statbotics import RegionFilter, StatboticsClient, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter()


# === Schemas ===

class RegionSchema(BaseModel):
    district: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class FetchFailureSchema(BaseModel):
    team: int
    status: Optional[int] = None
    error: str


class BenchmarkResponse(BaseModel):
    """Percentiles of one metric across a region's teams."""
    year: int
    region: RegionSchema
    metric: str
    team_count: int
    attempted: int
    error_count: int = 0
    errors_sample: list[FetchFailureSchema] = []
    percentiles: dict[str, float]


# === Endpoints ===

@router.get("/benchmarks/epa", response_model=BenchmarkResponse)
async def epa_benchmarks(
    year: int,
    metric: str = "unitless_epa",
    percentiles: str = "50,75,90",
    district: Optional[str] = None,
    state: Optional[str] = None,
    country: Optional[str] = None,
    max_teams: Optional[int] = Query(default=None, alias="maxTeams", ge=1),
    concurrency: Optional[int] = Query(default=None, ge=1, le=50),
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """
    Benchmarks for EPA metrics by region (uses team_year for reliability).

    Fetches the region's team list, then each team's season record with
    bounded concurrency, and reports the requested percentiles.
    """
    try:
        selected = Metric.parse(metric)
    except UnknownMetricError as e:
        raise HTTPException(status_code=400, detail=str(e))

    ranks = parse_ranks(percentiles)
    if not ranks:
        raise HTTPException(
            status_code=400, detail="Invalid 'percentiles' (e.g., 50,75,90)"
        )

    region = RegionFilter(district, state, country).with_default()
    service = BenchmarkService(client)

    try:
        result = await service.epa_benchmarks(
            year,
            selected,
            ranks,
            region,
            max_teams=max_teams or settings.max_identifiers,
            concurrency=concurrency or settings.aggregation_concurrency,
        )
    except EmptyInputSetError as e:
        logger.error(f"Benchmarks {year} {region.as_params()}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except NoExtractableValuesError as e:
        logger.error(f"Benchmarks {year} {region.as_params()}: {e}")
        raise HTTPException(
            status_code=502,
            detail={
                "error": "No metric values found via team_year",
                "year": year,
                "metric": selected.value,
                "attempted": e.attempted,
                "errors_sample": [f.to_dict() for f in e.errors_sample],
            },
        )
    except UpstreamError as e:
        raise upstream_http_error(e, "benchmarks failed")

    return BenchmarkResponse(
        year=year,
        region=RegionSchema(**region.as_params()),
        metric=selected.value,
        team_count=result.count,
        attempted=result.attempted,
        error_count=result.error_count,
        errors_sample=[FetchFailureSchema(**f.to_dict()) for f in result.errors_sample],
        percentiles={format_rank(rank): value for rank, value in result.percentiles.items()},
    )
