# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Aggregate benchmark result model."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .probe import ProbeResult


def calculate_percentile(values: Sequence[float], percentile: float) -> float:
    """Sorted ``values`` at index ``int(n * percentile / 100)``, clamped to the last item; 0.0 if empty."""
    if not values:
        return 0.0
    sorted_values = sorted(values)
    index = int(len(sorted_values) * percentile / 100)
    index = min(max(index, 0), len(sorted_values) - 1)
    return sorted_values[index]


@dataclass(frozen=True)
class BenchmarkResult:
    """Statistics over every attempt of one benchmark run. Durations are milliseconds."""

    url: str
    total_requests: int
    successful_requests: int
    failed_requests: int
    average_response_time: float
    fastest_response_time: float
    slowest_response_time: float
    requests_per_second: float
    total_duration: float = 0.0
    results: tuple[ProbeResult, ...] = field(default=(), repr=False)

    @classmethod
    def from_results(
        cls,
        url: str,
        total_requests: int,
        results: Sequence[ProbeResult],
        duration_seconds: float,
    ) -> BenchmarkResult:
        """Aggregate per-request results; ``duration_seconds`` is the whole run's wall clock."""
        response_times = [r.response_time for r in results]
        successful = sum(1 for r in results if r.success)
        if response_times:
            average = sum(response_times) / len(response_times)
            fastest = min(response_times)
            slowest = max(response_times)
        else:
            average = fastest = slowest = 0.0
        rps = total_requests / duration_seconds if duration_seconds > 0 else 0.0
        return cls(
            url=url,
            total_requests=total_requests,
            successful_requests=successful,
            failed_requests=len(results) - successful,
            average_response_time=average,
            fastest_response_time=fastest,
            slowest_response_time=slowest,
            requests_per_second=rps,
            total_duration=duration_seconds * 1000.0,
            results=tuple(results),
        )

    @property
    def success_rate(self) -> float:
        """Percentage of successful requests."""
        if not self.total_requests:
            return 0.0
        return self.successful_requests / self.total_requests * 100

    def percentile(self, percentile: float) -> float:
        return calculate_percentile([r.response_time for r in self.results], percentile)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "average_response_time": self.average_response_time,
            "fastest_response_time": self.fastest_response_time,
            "slowest_response_time": self.slowest_response_time,
            "requests_per_second": self.requests_per_second,
            "total_duration": self.total_duration,
            "results": [r.to_dict() for r in self.results],
        }
