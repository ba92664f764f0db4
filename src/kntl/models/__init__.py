# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for KNTL."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .benchmark import BenchmarkResult, calculate_percentile
from .options import BenchmarkOptions, RequestOptions
from .probe import PingResult, ProbeResult

__all__ = [
    "BenchmarkOptions",
    "BenchmarkResult",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "PingResult",
    "ProbeResult",
    "RequestOptions",
    "calculate_percentile",
]
