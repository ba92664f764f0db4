# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
KNTL (Key Network Testing Library) package entrypoint.

This package probes HTTP endpoints with phase-level timing (DNS lookup, TLS handshake,
round trip) and benchmarks them under bounded concurrency. HTTP behavior is abstracted
behind an injectable async client interface, and results are modeled with immutable
dataclasses for the presentation layer to format.
"""

from .benchmark import BenchmarkEngine
from .config import HttpSettings, load_http_settings
from .errors import FailureKind, InvalidArgumentError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
    is_valid_url,
    normalize_url,
)
from .log import setup_logging
from .models import BenchmarkOptions, BenchmarkResult, PingResult, ProbeResult, RequestOptions
from .probe import ProbeEngine
from .runtime import Kntl
from .version import __version__

__all__ = [
    "BenchmarkEngine",
    "BenchmarkOptions",
    "BenchmarkResult",
    "FailureKind",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InvalidArgumentError",
    "Kntl",
    "PingResult",
    "ProbeEngine",
    "ProbeResult",
    "RequestOptions",
    "StubHttpClient",
    "create_default_http_client",
    "is_valid_url",
    "load_http_settings",
    "normalize_url",
    "setup_logging",
    "__version__",
]
