# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import json
from datetime import datetime, timezone

import pytest

from kntl.cli import main as cli
from kntl.cli.formatting import (
    format_benchmark_result,
    format_benchmark_summary,
    format_ping_result,
    format_probe_result,
    format_response_time,
    format_results_table,
)
from kntl.cli.main import build_parser, parse_json_data
from kntl.config import HttpSettings
from kntl.http.adapters import StubHttpClient
from kntl.http.models import HttpResponse
from kntl.models import BenchmarkOptions, BenchmarkResult, PingResult, ProbeResult
from kntl.runtime import Kntl

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _ok(url="https://example.com", response_time=123.0) -> ProbeResult:
    return ProbeResult(url=url, response_time=response_time, success=True, timestamp=NOW, status_code=200, status_text="OK")


def _failed(url="https://down.example") -> ProbeResult:
    return ProbeResult(url=url, response_time=1500.0, success=False, timestamp=NOW, error="Connection refused")


def test_format_response_time():
    assert format_response_time(123) == "123ms"
    assert format_response_time(999) == "999ms"
    assert format_response_time(2.5) == "3ms"
    assert format_response_time(0.4) == "0ms"
    assert format_response_time(1000) == "1.00s"
    assert format_response_time(1500) == "1.50s"


def test_parse_json_data():
    assert parse_json_data('{"name":"test"}') == {"name": "test"}
    assert parse_json_data("[1,2,3]") == [1, 2, 3]
    with pytest.raises(ValueError, match="Invalid JSON data provided"):
        parse_json_data("invalid json")
    with pytest.raises(ValueError, match="Invalid JSON data provided"):
        parse_json_data('{"incomplete":')


def test_format_probe_and_ping_results():
    assert format_probe_result(_ok()) == "✓ https://example.com - 200 OK - 123ms"
    assert format_probe_result(_failed()) == "✗ https://down.example - Connection refused - 1.50s"
    not_found = ProbeResult(url="https://x", response_time=5.0, success=False, timestamp=NOW, status_code=404, status_text="Not Found")
    assert "404 Not Found" in format_probe_result(not_found)

    ping = PingResult(
        url="https://example.com",
        response_time=80.0,
        success=True,
        timestamp=NOW,
        status_code=200,
        status_text="OK",
        dns_lookup_time=4.0,
        tls_handshake_time=20.0,
    )
    assert format_ping_result(ping).endswith("(DNS: 4ms, TLS: 20ms)")
    plain = PingResult(url="http://example.com", response_time=80.0, success=True, timestamp=NOW, status_code=200, dns_lookup_time=2.0)
    assert format_ping_result(plain).endswith("(DNS: 2ms)")


def test_format_tables_and_benchmarks():
    table = format_results_table([_ok(), _failed()])
    assert "Test Results:" in table
    assert "1 successful, 1 failed" in table

    bench = BenchmarkResult.from_results("https://example.com", 2, [_ok(response_time=100.0), _failed()], 0.5)
    text = format_benchmark_result(bench)
    assert "Benchmark Results for https://example.com" in text
    assert "Success Rate: 50.0%" in text
    assert "Requests/Second: 4.00" in text
    summary = format_benchmark_summary([bench, bench])
    assert "Total URLs tested: 2" in summary
    assert "Total requests: 4" in summary


def test_build_parser():
    parser = build_parser()
    args = parser.parse_args(["ping", "example.com", "--json", "-t", "500"])
    assert args.command == "ping"
    assert args.url == "example.com"
    assert args.json is True
    assert args.timeout == 500.0

    args = parser.parse_args(
        ["test", "a.com", "b.com", "-m", "post", "-d", '{"x":1}', "-H", "A: 1", "-H", "B: 2", "-b", "5", "-c", "2"]
    )
    assert args.urls == ["a.com", "b.com"]
    assert args.header == ["A: 1", "B: 2"]
    assert args.benchmark == 5
    assert args.concurrency == 2

    with pytest.raises(SystemExit):
        parser.parse_args(["test", "a.com", "-b", "0"])


class FakeKntl:
    """Stands in for the facade so CLI tests never touch the network."""

    instances: list["FakeKntl"] = []
    probe_results: dict[str, ProbeResult] = {}

    def __init__(self, http_client=None, settings=None):
        self.http_client = http_client
        self.settings = settings
        self.calls = []
        FakeKntl.instances.append(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None

    async def ping(self, url):
        self.calls.append(("ping", url))
        base = FakeKntl.probe_results.get(url) or _ok(url)
        return PingResult(
            url=url,
            response_time=base.response_time,
            success=base.success,
            timestamp=NOW,
            status_code=base.status_code,
            status_text=base.status_text,
            error=base.error,
            dns_lookup_time=3.0,
        )

    async def probe(self, url, options=None):
        self.calls.append(("probe", url, options))
        return FakeKntl.probe_results.get(url) or _ok(url)

    async def benchmark(self, url, count, options=None):
        self.calls.append(("benchmark", url, count, options))
        return BenchmarkResult.from_results(url, count, [_ok(url)] * count, 0.1)


@pytest.fixture
def fake_kntl(monkeypatch):
    FakeKntl.instances = []
    FakeKntl.probe_results = {}
    monkeypatch.setattr(cli, "Kntl", FakeKntl)
    monkeypatch.setattr(cli, "create_default_http_client", lambda settings: StubHttpClient())
    return FakeKntl


def test_cli_ping_text_and_exit_codes(fake_kntl, capsys):
    assert cli.main(["ping", "example.com", "-t", "2500"]) == 0
    out = capsys.readouterr().out
    assert "✓ https://example.com" in out
    assert "DNS: 3ms" in out
    (instance,) = fake_kntl.instances
    assert instance.calls == [("ping", "https://example.com")]
    assert instance.settings.timeout == 2500.0

    fake_kntl.probe_results["https://down.example"] = _failed()
    assert cli.main(["ping", "down.example"]) == 1


def test_cli_ping_json_exits_zero_even_on_failure(fake_kntl, capsys):
    fake_kntl.probe_results["https://down.example"] = _failed()
    assert cli.main(["ping", "down.example", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is False
    assert payload["error"] == "Connection refused"
    assert payload["dns_lookup_time"] == 3.0


def test_cli_test_multiple_urls(fake_kntl, capsys):
    fake_kntl.probe_results["https://b.example"] = _failed("https://b.example")
    code = cli.main(["test", "a.example", "b.example", "-m", "post", "-d", '{"x": 1}', "-H", "X-Key: v"])
    assert code == 1
    out = capsys.readouterr().out
    assert "1 successful, 1 failed" in out

    instance = fake_kntl.instances[-1]
    _, url, options = instance.calls[0]
    assert url == "https://a.example"
    assert isinstance(options, BenchmarkOptions)
    assert options.method == "POST"
    assert options.data == {"x": 1}
    assert options.headers == {"X-Key": "v"}


def test_cli_test_json_output(fake_kntl, capsys):
    assert cli.main(["test", "http://a.example", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["url"] == "http://a.example"
    assert payload[0]["status_code"] == 200


def test_cli_benchmark(fake_kntl, capsys):
    assert cli.main(["test", "a.example", "b.example", "-b", "3", "-c", "2"]) == 0
    out = capsys.readouterr().out
    assert "Benchmark Results for https://a.example" in out
    assert "Total URLs tested: 2" in out
    _, url, count, options = fake_kntl.instances[-1].calls[0]
    assert (url, count, options.concurrency) == ("https://a.example", 3, 2)


@pytest.mark.parametrize(
    "argv, message",
    [
        (["test", "a.example", "-m", "TRACE"], "Invalid method: TRACE"),
        (["test", "a.example", "-d", '{"x":1}'], "Cannot use --data with GET method"),
        (["test", "a.example", "-m", "POST", "-d", "nope"], "Invalid JSON data provided"),
        (["test", "http://"], "Invalid URL: http://"),
    ],
)
def test_cli_invalid_input(fake_kntl, capsys, argv, message):
    assert cli.main(argv) == 1
    assert message in capsys.readouterr().err
    assert all(not instance.calls for instance in fake_kntl.instances)


def test_facade_wires_shared_client_and_closes_it():
    stub = StubHttpClient({"http://a": HttpResponse(ok=True, status_code=200, reason_phrase="OK")})

    async def go():
        async with Kntl(http_client=stub, settings=HttpSettings(timeout=500)) as kntl:
            assert kntl.probe_engine.http_client is stub
            assert kntl.benchmark_engine.probe_engine is kntl.probe_engine
            single = await kntl.probe("http://a")
            bench = await kntl.benchmark("http://a", 3, BenchmarkOptions(concurrency=2))
            many = await kntl.benchmark_multiple(["http://a", "http://a"], 2)
        return single, bench, many

    single, bench, many = asyncio.run(go())
    assert single.success is True
    assert bench.successful_requests == 3
    assert [r.total_requests for r in many] == [2, 2]
    assert stub.closed is True
