"""Benchmarks feature module: fan-out aggregation and percentile statistics."""

from .metrics import Metric, UnknownMetricError, summarize_team_year
from .models import (
    AggregationResult,
    BenchmarkError,
    EmptyInputSetError,
    FetchFailure,
    MetricSample,
    NoExtractableValuesError,
)
from .stats import percentile, percentiles, parse_ranks, format_rank
from .aggregator import FanOutAggregator
from .service import BenchmarkService, extract_team_numbers

__all__ = [
    "Metric",
    "UnknownMetricError",
    "summarize_team_year",
    "AggregationResult",
    "BenchmarkError",
    "EmptyInputSetError",
    "FetchFailure",
    "MetricSample",
    "NoExtractableValuesError",
    "percentile",
    "percentiles",
    "parse_ranks",
    "format_rank",
    "FanOutAggregator",
    "BenchmarkService",
    "extract_team_numbers",
]
