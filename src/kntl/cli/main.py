# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""KNTL CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import InvalidArgumentError
from ..http import create_default_http_client, is_valid_url, normalize_url, parse_headers
from ..log import setup_logging
from ..models import BenchmarkOptions, BenchmarkResult, ProbeResult, RequestOptions
from ..runtime import Kntl
from ..version import __version__
from .formatting import (
    OK_MARK,
    format_benchmark_result,
    format_benchmark_summary,
    format_ping_result,
    format_probe_result,
    format_results_table,
)

VALID_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


class CliError(Exception):
    """User-facing error; printed and mapped to exit code 1."""


def parse_json_data(data: str) -> Any:
    try:
        return json.loads(data)
    except ValueError as exc:
        raise ValueError("Invalid JSON data provided") from exc


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return parsed


def _timeout_ms(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected milliseconds, got {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive, got {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kntl", description="Key Network Testing Library: probe and benchmark HTTP endpoints")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $KNTL_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-j", "--json", action="store_true", help="Output results in JSON format")
    common.add_argument("-t", "--timeout", type=_timeout_ms, default=None, help="Request timeout in milliseconds (default 10000)")
    common.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification for the HTTP request (useful for lab/self-signed targets)",
    )

    ping = subparsers.add_parser(
        "ping",
        parents=[common],
        help="Ping a URL and measure response time, DNS lookup, and TLS handshake",
    )
    ping.add_argument("url", help="URL to ping")

    test = subparsers.add_parser("test", parents=[common], help="Test API endpoints with custom options")
    test.add_argument("urls", nargs="+", help="URLs to test")
    test.add_argument("-m", "--method", default="GET", help="HTTP method (GET, POST, PUT, DELETE, PATCH)")
    test.add_argument("-d", "--data", default=None, help="JSON payload for POST/PUT requests")
    test.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        help="Custom header 'Name: value' (can be used multiple times)",
    )
    test.add_argument("-b", "--benchmark", type=_positive_int, default=None, help="Run a benchmark with this many requests")
    test.add_argument("-c", "--concurrency", type=int, default=1, help="Concurrent requests per benchmark batch")
    return parser


def _normalize_targets(urls: list[str]) -> list[str]:
    targets = []
    for url in urls:
        normalized = normalize_url(url)
        if not is_valid_url(normalized):
            raise CliError(f"Invalid URL: {url}")
        targets.append(normalized)
    return targets


def _settings_for(args: argparse.Namespace) -> HttpSettings:
    settings = load_http_settings().with_overrides(timeout=args.timeout)
    if args.ignore_ssl_errors:
        settings = settings.with_overrides(verify_ssl=False)
    return settings


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def _show_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


async def _run_ping(args: argparse.Namespace) -> int:
    (url,) = _normalize_targets([args.url])
    settings = _settings_for(args)
    async with Kntl(create_default_http_client(settings), settings) as kntl:
        result = await kntl.ping(url)

    if args.json:
        _print_json(result.to_dict())
        return 0
    print(format_ping_result(result))
    return 0 if result.success else 1


def _request_options(args: argparse.Namespace) -> BenchmarkOptions:
    method = (args.method or "GET").upper()
    if method not in VALID_METHODS:
        raise CliError(f"Invalid method: {method}. Valid methods: {', '.join(VALID_METHODS)}")
    data = None
    if args.data is not None:
        if method == "GET":
            raise CliError("Cannot use --data with GET method")
        try:
            data = parse_json_data(args.data)
        except ValueError as exc:
            raise CliError(str(exc)) from exc
    return BenchmarkOptions(
        method=method,
        data=data,
        headers=parse_headers(args.header),
        timeout=args.timeout,
        concurrency=args.concurrency,
    )


async def _run_tests(kntl: Kntl, urls: list[str], options: RequestOptions, as_json: bool) -> int:
    results: list[ProbeResult] = []
    for url in urls:
        result = await kntl.probe(url, options)
        results.append(result)
        if not as_json:
            print(format_probe_result(result))

    if as_json:
        _print_json([r.to_dict() for r in results])
    elif len(urls) > 1:
        print(format_results_table(results))
    return 0 if all(r.success for r in results) else 1


async def _run_benchmarks(kntl: Kntl, urls: list[str], count: int, options: BenchmarkOptions, as_json: bool) -> int:
    results: list[BenchmarkResult] = []
    for url in urls:
        result = await kntl.benchmark(url, count, options)
        results.append(result)
        if not as_json:
            print(format_benchmark_result(result))

    if as_json:
        _print_json([r.to_dict() for r in results])
    elif len(urls) > 1:
        print(format_benchmark_summary(results))
        print(f"{OK_MARK} Benchmark completed")
    return 0


async def _run_test(args: argparse.Namespace) -> int:
    urls = _normalize_targets(args.urls)
    options = _request_options(args)
    settings = _settings_for(args)
    async with Kntl(create_default_http_client(settings), settings) as kntl:
        if args.benchmark:
            return await _run_benchmarks(kntl, urls, args.benchmark, options, args.json)
        return await _run_tests(kntl, urls, options, args.json)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    runner = _run_ping if args.command == "ping" else _run_test
    try:
        return asyncio.run(runner(args))
    except (CliError, InvalidArgumentError) as exc:
        _show_error(str(exc))
        return 1
    except KeyboardInterrupt:
        _show_error("Interrupted")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
