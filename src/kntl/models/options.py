# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-call option bundles for probes and benchmark runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RequestOptions:
    """
    Options for a single probe.

    ``timeout`` (milliseconds) and ``max_redirects`` fall back to the engine's
    ``HttpSettings`` when left as ``None``. ``data`` may be a ``str``/``bytes`` body or a
    JSON-serializable mapping/list.
    """

    method: str = "GET"
    data: Any = None
    headers: dict[str, str] | None = None
    timeout: float | None = None
    max_redirects: int | None = None


@dataclass(frozen=True)
class BenchmarkOptions(RequestOptions):
    """Request options plus the number of probes allowed in flight at once."""

    concurrency: int = 1

    @property
    def effective_concurrency(self) -> int:
        try:
            value = int(self.concurrency)
        except (TypeError, ValueError):
            return 1
        return max(1, value)


__all__ = ["BenchmarkOptions", "RequestOptions"]
