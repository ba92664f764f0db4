# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Benchmark engine: repeated probes in concurrency-bounded batches."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from ..errors import InvalidArgumentError
from ..models import BenchmarkOptions, BenchmarkResult, ProbeResult
from ..probe.engine import ProbeEngine
from ..timing import Stopwatch

logger = logging.getLogger(__name__)


def _validate_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidArgumentError(f"Request count must be a positive integer, got {count!r}")
    return count


def plan_batches(count: int, concurrency: int) -> list[int]:
    """Sizes of the sequential batches needed to issue ``count`` requests."""
    count = _validate_count(count)
    concurrency = max(1, concurrency)
    return [min(concurrency, count - issued) for issued in range(0, count, concurrency)]


class BenchmarkEngine:
    """
    Drives many probes against one URL and aggregates them.

    Batches run strictly one after another and every member of a batch is awaited, so
    no more than ``concurrency`` probes are ever in flight for a run.
    """

    def __init__(self, probe_engine: ProbeEngine | None = None):
        self._owns_engine = probe_engine is None
        self.probe_engine = probe_engine or ProbeEngine()

    async def aclose(self) -> None:
        if self._owns_engine:
            await self.probe_engine.aclose()

    async def __aenter__(self) -> BenchmarkEngine:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def run(self, url: str, count: int, options: BenchmarkOptions | None = None) -> BenchmarkResult:
        """Benchmark ``url`` with ``count`` requests."""
        options = options or BenchmarkOptions()
        batches = plan_batches(count, options.effective_concurrency)

        results: list[ProbeResult] = []
        watch = Stopwatch()
        for index, size in enumerate(batches, 1):
            logger.debug("Batch %d/%d for %s (%d requests)", index, len(batches), url, size)
            results.extend(await self._run_batch(url, size, options))
        duration = watch.elapsed_seconds()

        result = BenchmarkResult.from_results(url, count, results, duration)
        logger.debug(
            "Benchmark of %s finished: %d/%d successful, %.2f req/s",
            url,
            result.successful_requests,
            result.total_requests,
            result.requests_per_second,
        )
        return result

    async def run_multiple(
        self,
        urls: Sequence[str],
        count: int,
        options: BenchmarkOptions | None = None,
    ) -> list[BenchmarkResult]:
        """Benchmark every URL independently and in parallel; results follow ``urls`` order."""
        _validate_count(count)
        if not urls:
            return []
        return list(await asyncio.gather(*(self.run(url, count, options) for url in urls)))

    async def _run_batch(self, url: str, size: int, options: BenchmarkOptions) -> list[ProbeResult]:
        # Results are collected in completion order.
        tasks = [asyncio.ensure_future(self.probe_engine.probe(url, options)) for _ in range(size)]
        try:
            return [await finished for finished in asyncio.as_completed(tasks)]
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()


__all__ = ["BenchmarkEngine", "plan_batches"]
