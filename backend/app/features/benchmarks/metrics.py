"""
Team-year metrics that can be benchmarked.

Each metric maps to one nested path inside a Statbotics team_year
document. Extraction returns None for anything that is not a finite
number, so missing data is skipped rather than counted as zero.
"""

import math
from enum import Enum
from typing import Any, Optional


class UnknownMetricError(ValueError):
    """Metric name is not one of the supported metrics."""

    def __init__(self, name: str):
        self.name = name
        self.supported = [m.value for m in Metric]
        super().__init__(
            f"Unknown metric '{name}' (supported: {', '.join(self.supported)})"
        )


class Metric(str, Enum):
    """Supported benchmark metrics."""
    UNITLESS_EPA = "unitless_epa"
    NORM_EPA = "norm_epa"
    EPA_POINTS_MEAN = "epa_points_mean"
    EPA_POINTS_SD = "epa_points_sd"
    WORLD_RANK = "world_rank"

    @classmethod
    def parse(cls, name: str) -> "Metric":
        try:
            return cls(name)
        except ValueError:
            raise UnknownMetricError(name) from None

    @property
    def path(self) -> tuple[str, ...]:
        return METRIC_PATHS[self]

    def extract(self, record: Any) -> Optional[float]:
        """Read this metric from a team_year record."""
        return as_finite(dig(record, self.path))


# Location of each metric inside a team_year document
METRIC_PATHS: dict[Metric, tuple[str, ...]] = {
    Metric.UNITLESS_EPA: ("epa", "unitless"),
    Metric.NORM_EPA: ("epa", "norm"),
    Metric.EPA_POINTS_MEAN: ("epa", "total_points", "mean"),
    Metric.EPA_POINTS_SD: ("epa", "total_points", "sd"),
    Metric.WORLD_RANK: ("epa", "ranks", "total", "rank"),
}


def dig(record: Any, path: tuple[str, ...]) -> Any:
    """Follow a key path through nested dicts; None when any hop is missing."""
    node = record
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def as_finite(value: Any) -> Optional[float]:
    """Return value as float if it is a finite real number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def summarize_team_year(record: dict) -> dict:
    """Flatten the commonly used fields of a team_year record."""
    return {
        "team": record.get("team"),
        "year": record.get("year"),
        "name": record.get("name"),
        "country": record.get("country"),
        "state": record.get("state"),
        "district": record.get("district"),
        "epa_points_mean": Metric.EPA_POINTS_MEAN.extract(record),
        "epa_points_sd": Metric.EPA_POINTS_SD.extract(record),
        "unitless_epa": Metric.UNITLESS_EPA.extract(record),
        "norm_epa": Metric.NORM_EPA.extract(record),
        "world_rank": Metric.WORLD_RANK.extract(record),
    }
