"""Data models for benchmark aggregation (dataclasses, no I/O)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

from app.features.statbotics import UpstreamError

from .metrics import Metric

Identifier = Union[int, str]


@dataclass(frozen=True)
class MetricSample:
    """Finite values of one metric collected for one season."""

    metric: Metric
    values: tuple[float, ...]

    def __post_init__(self):
        if not all(math.isfinite(v) for v in self.values):
            raise ValueError("MetricSample values must be finite")

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class FetchFailure:
    """One identifier whose upstream fetch failed."""

    identifier: Identifier
    error: UpstreamError

    def to_dict(self) -> dict:
        return {
            "team": self.identifier,
            "status": self.error.status_code,
            "error": str(self.error),
        }


@dataclass
class AggregationResult:
    """Outcome of one fan-out aggregation."""

    metric: Metric
    count: int  # values extracted
    attempted: int  # identifiers fetched (after cap)
    percentiles: dict[float, float]
    error_count: int = 0
    errors_sample: list[FetchFailure] = field(default_factory=list)


# =============================================================================
# Exceptions
# =============================================================================

class BenchmarkError(Exception):
    """Base benchmark error."""
    pass


class EmptyInputSetError(BenchmarkError):
    """Nothing to aggregate: the identifier list was empty."""

    def __init__(self, message: str = "No identifiers to aggregate"):
        super().__init__(message)


class NoExtractableValuesError(BenchmarkError):
    """Fan-out finished but no numeric value could be extracted."""

    def __init__(
        self,
        metric: Metric,
        attempted: int,
        error_count: int,
        errors_sample: list[FetchFailure],
    ):
        self.metric = metric
        self.attempted = attempted
        self.error_count = error_count
        self.errors_sample = errors_sample
        super().__init__(
            f"No values found for metric '{metric.value}' "
            f"({attempted} attempted, {error_count} failed)"
        )
