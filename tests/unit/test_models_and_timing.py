# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import dataclasses
import logging
import time
from datetime import datetime, timezone

import pytest

from kntl import timing
from kntl.errors import FailureKind
from kntl.log import TRANSPORT_LOGGERS, resolve_level, setup_logging
from kntl.models import BenchmarkOptions, PingResult, ProbeResult, RequestOptions
from kntl.timing import Stopwatch, elapsed_ms


def test_probe_result_is_immutable_and_serializable():
    result = ProbeResult(
        url="http://x",
        response_time=12.5,
        success=False,
        timestamp=datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc),
        error="Request timeout",
        failure_kind=FailureKind.TIMEOUT,
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.success = True  # type: ignore[misc]

    assert result.to_dict() == {
        "url": "http://x",
        "status_code": None,
        "status_text": None,
        "response_time": 12.5,
        "success": False,
        "error": "Request timeout",
        "failure_kind": "TIMEOUT",
        "timestamp": "2024-05-01T08:30:00+00:00",
    }


def test_ping_result_defaults():
    ping = PingResult(url="http://x", response_time=1.0, success=True, timestamp=timing.utc_now(), status_code=200)
    assert ping.dns_lookup_time == 0.0
    assert ping.tls_handshake_time is None
    assert isinstance(ping, ProbeResult)


def test_request_options_defaults():
    options = RequestOptions()
    assert options.method == "GET"
    assert options.timeout is None
    assert options.max_redirects is None


def test_benchmark_options_effective_concurrency():
    assert BenchmarkOptions().effective_concurrency == 1
    assert BenchmarkOptions(concurrency=4).effective_concurrency == 4
    assert BenchmarkOptions(concurrency=0).effective_concurrency == 1
    assert BenchmarkOptions(concurrency=-3).effective_concurrency == 1
    assert BenchmarkOptions(concurrency="x").effective_concurrency == 1  # type: ignore[arg-type]
    assert isinstance(BenchmarkOptions(), RequestOptions)


def test_elapsed_ms_never_negative():
    assert elapsed_ms(time.perf_counter() + 10) == 0.0
    assert elapsed_ms(time.perf_counter() - 0.5) >= 500.0


def test_stopwatch_measures_monotonic_time(monkeypatch):
    readings = iter([100.0, 100.25])

    class FakeTime:
        @staticmethod
        def perf_counter():
            return next(readings)

    monkeypatch.setattr(timing, "time", FakeTime)
    watch = Stopwatch()
    assert watch.started_at.tzinfo is timezone.utc
    assert watch.elapsed_ms() == pytest.approx(250.0)


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("ERROR") == logging.ERROR
    assert resolve_level("chatty") == logging.WARNING


def test_setup_logging_keeps_transport_loggers_quiet():
    try:
        assert setup_logging("INFO") == logging.INFO
        assert all(logging.getLogger(name).level == logging.WARNING for name in TRANSPORT_LOGGERS)
        setup_logging("DEBUG")
        assert all(logging.getLogger(name).level == logging.DEBUG for name in TRANSPORT_LOGGERS)
    finally:
        for name in TRANSPORT_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)
