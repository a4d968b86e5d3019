"""Percentile statistics for metric samples."""

from __future__ import annotations

import math
from typing import Iterable, Sequence


def percentile(sample: Sequence[float], rank: float) -> float | None:
    """Interpolated percentile (linear between closest ranks).

    Sorts a copy, so the caller's sequence is left untouched and input
    order does not matter.

    [10, 20, 30, 40] @ 75  → 32.5
    [1, 2, 3]        @ 50  → 2

    Returns:
        None for an empty sample.

    Raises:
        ValueError: rank outside [0, 100].
    """
    if not sample:
        return None
    return _percentile_sorted(sorted(sample), rank)


def percentiles(
    sample: Sequence[float], ranks: Iterable[float]
) -> dict[float, float]:
    """Compute several percentiles from one sort.

    Duplicate ranks collapse onto the same key.
    """
    if not sample:
        return {}
    sorted_values = sorted(sample)
    return {rank: _percentile_sorted(sorted_values, rank) for rank in ranks}


def parse_ranks(raw: str) -> list[float]:
    """Parse "50,75,90" into ranks, dropping junk and out-of-range entries."""
    ranks = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            value = float(part)
        except ValueError:
            continue
        if math.isfinite(value) and 0 <= value <= 100:
            ranks.append(value)
    return ranks


def format_rank(rank: float) -> str:
    """Render a rank as a mapping key: 50.0 → "50", 62.5 → "62.5".

    Uses the shortest round-tripping form, so distinct ranks never share a key.
    """
    text = str(float(rank))
    return text[:-2] if text.endswith(".0") else text


def _percentile_sorted(sorted_values: Sequence[float], rank: float) -> float:
    if not 0 <= rank <= 100:
        raise ValueError(f"Percentile rank must be within [0, 100], got {rank}")

    idx = (rank / 100) * (len(sorted_values) - 1)
    lower = math.floor(idx)
    upper = math.ceil(idx)
    if lower == upper:
        return sorted_values[lower]
    weight = idx - lower
    return sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight
