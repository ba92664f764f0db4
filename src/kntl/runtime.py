# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level KNTL facade for probe and benchmark workflows."""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import suppress

from .benchmark.engine import BenchmarkEngine
from .config import HttpSettings, load_http_settings
from .http.client import HttpClient, create_default_http_client
from .models import BenchmarkOptions, BenchmarkResult, PingResult, ProbeResult, RequestOptions
from .probe.engine import ProbeEngine


class Kntl:
    """
    Convenience wrapper that wires a shared HTTP client across probes and benchmarks.

    The client (and its connection pool) is closed when the facade exits.
    """

    def __init__(self, http_client: HttpClient | None = None, settings: HttpSettings | None = None):
        self.http_settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.probe_engine = ProbeEngine(self.http_client, self.http_settings)
        self.benchmark_engine = BenchmarkEngine(self.probe_engine)

    async def probe(self, url: str, options: RequestOptions | None = None) -> ProbeResult:
        return await self.probe_engine.probe(url, options)

    async def ping(self, url: str) -> PingResult:
        return await self.probe_engine.ping(url)

    async def benchmark(self, url: str, count: int, options: BenchmarkOptions | None = None) -> BenchmarkResult:
        return await self.benchmark_engine.run(url, count, options)

    async def benchmark_multiple(
        self,
        urls: Sequence[str],
        count: int,
        options: BenchmarkOptions | None = None,
    ) -> list[BenchmarkResult]:
        return await self.benchmark_engine.run_multiple(urls, count, options)

    async def aclose(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "aclose"):
                await self.http_client.aclose()

    async def __aenter__(self) -> Kntl:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()
