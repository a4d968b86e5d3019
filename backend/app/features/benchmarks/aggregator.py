"""
Bounded fan-out aggregation.

Fetches one upstream record per identifier with a fixed number of
concurrent workers, extracts one metric from each record and reduces
the collected values into percentiles.

Workers share a single asyncio.Queue of identifiers. Everything runs on
one event loop, so claiming an identifier and appending results happen
between await points and never race.
"""

import asyncio
import logging
from typing import Callable, Iterable, Optional, Sequence

from app.config import settings
from app.features.statbotics import StatboticsClient, UpstreamError

from .metrics import Metric
from .models import (
    AggregationResult,
    EmptyInputSetError,
    FetchFailure,
    Identifier,
    MetricSample,
    NoExtractableValuesError,
)
from .stats import percentiles

logger = logging.getLogger(__name__)

PathBuilder = Callable[[Identifier], str]


class FanOutAggregator:
    """
    Collects a metric across many identifiers under a concurrency cap.

    Usage:
        aggregator = FanOutAggregator(client, concurrency=10)
        result = await aggregator.aggregate(
            [254, 1678], Metric.UNITLESS_EPA, [50, 90],
            path_for=lambda team: f"/v3/team_year/{team}/2025",
        )
    """

    def __init__(
        self,
        client: StatboticsClient,
        concurrency: Optional[int] = None,
        max_identifiers: Optional[int] = None,
        errors_sample_size: Optional[int] = None,
    ):
        self.client = client
        self.concurrency = (
            settings.aggregation_concurrency if concurrency is None else concurrency
        )
        self.max_identifiers = (
            settings.max_identifiers if max_identifiers is None else max_identifiers
        )
        self.errors_sample_size = (
            settings.errors_sample_size
            if errors_sample_size is None
            else errors_sample_size
        )
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")

    async def collect(
        self,
        identifiers: Sequence[Identifier],
        metric: Metric,
        path_for: PathBuilder,
    ) -> tuple[MetricSample, list[FetchFailure]]:
        """
        Fan out over identifiers and return (sample, failures).

        Identifiers beyond max_identifiers are dropped. Values that are
        missing or non-numeric are skipped silently.
        """
        if not identifiers:
            raise EmptyInputSetError()

        capped = list(identifiers)[: self.max_identifiers]
        queue: asyncio.Queue = asyncio.Queue()
        for identifier in capped:
            queue.put_nowait(identifier)

        values: list[float] = []
        failures: list[FetchFailure] = []

        async def worker():
            while True:
                try:
                    identifier = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                try:
                    record = await self.client.fetch(path_for(identifier))
                except UpstreamError as e:
                    failures.append(FetchFailure(identifier, e))
                    continue
                value = metric.extract(record)
                if value is not None:
                    values.append(value)

        workers = min(self.concurrency, len(capped))
        await asyncio.gather(*(worker() for _ in range(workers)))

        if failures:
            logger.warning(
                f"Fan-out for {metric.value}: {len(failures)}/{len(capped)} fetches failed"
            )
        return MetricSample(metric=metric, values=tuple(values)), failures

    async def aggregate(
        self,
        identifiers: Sequence[Identifier],
        metric: Metric,
        ranks: Iterable[float],
        path_for: PathBuilder,
    ) -> AggregationResult:
        """
        Fan out, then reduce the collected sample into percentiles.

        Raises:
            EmptyInputSetError: identifiers is empty
            NoExtractableValuesError: no numeric value was collected
        """
        ranks = list(ranks)
        sample, failures = await self.collect(identifiers, metric, path_for)
        attempted = min(len(identifiers), self.max_identifiers)
        errors_sample = failures[: self.errors_sample_size]

        if not sample.values:
            raise NoExtractableValuesError(
                metric=metric,
                attempted=attempted,
                error_count=len(failures),
                errors_sample=errors_sample,
            )

        logger.info(
            f"Aggregated {metric.value}: {len(sample)} values from {attempted} identifiers"
        )
        return AggregationResult(
            metric=metric,
            count=len(sample),
            attempted=attempted,
            percentiles=percentiles(sample.values, ranks),
            error_count=len(failures),
            errors_sample=errors_sample,
        )
