# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Plain-text rendering of probe and benchmark results."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import BenchmarkResult, PingResult, ProbeResult

OK_MARK = "✓"
FAIL_MARK = "✗"


def format_response_time(ms: float) -> str:
    if ms < 1000:
        return f"{int(ms + 0.5)}ms"
    return f"{ms / 1000:.2f}s"


def format_probe_result(result: ProbeResult) -> str:
    response_time = format_response_time(result.response_time)
    if result.success:
        status = f"{result.status_code} {result.status_text or ''}".rstrip()
        return f"{OK_MARK} {result.url} - {status} - {response_time}"
    reason = result.error
    if reason is None and result.status_code is not None:
        reason = f"{result.status_code} {result.status_text or ''}".rstrip()
    return f"{FAIL_MARK} {result.url} - {reason or 'Failed'} - {response_time}"


def format_ping_result(result: PingResult) -> str:
    base = format_probe_result(result)
    if not result.success:
        return base
    details = [f"DNS: {format_response_time(result.dns_lookup_time)}"]
    if result.tls_handshake_time is not None:
        details.append(f"TLS: {format_response_time(result.tls_handshake_time)}")
    return f"{base} ({', '.join(details)})"


def format_benchmark_result(result: BenchmarkResult) -> str:
    lines = [
        f"\nBenchmark Results for {result.url}",
        "=" * 50,
        f"Total Requests: {result.total_requests}",
        f"Successful: {result.successful_requests}",
        f"Failed: {result.failed_requests}",
        f"Success Rate: {result.success_rate:.1f}%",
        "",
        "Timing Statistics:",
        f"Average Response Time: {format_response_time(result.average_response_time)}",
        f"Fastest Response: {format_response_time(result.fastest_response_time)}",
        f"Slowest Response: {format_response_time(result.slowest_response_time)}",
        f"95th Percentile: {format_response_time(result.percentile(95))}",
        f"Requests/Second: {result.requests_per_second:.2f}",
    ]
    return "\n".join(lines)


def format_results_table(results: Sequence[ProbeResult]) -> str:
    successful = sum(1 for r in results if r.success)
    lines = ["\nTest Results:", "-" * 80]
    lines.extend(format_probe_result(r) for r in results)
    lines.append("-" * 80)
    lines.append(f"{successful} successful, {len(results) - successful} failed")
    return "\n".join(lines)


def format_benchmark_summary(results: Sequence[BenchmarkResult]) -> str:
    """Totals across several benchmarked URLs."""
    total_requests = sum(r.total_requests for r in results)
    total_successful = sum(r.successful_requests for r in results)
    average = sum(r.average_response_time for r in results) / len(results) if results else 0.0
    success_rate = total_successful / total_requests * 100 if total_requests else 0.0
    return "\n".join(
        [
            "\n" + "=" * 50,
            f"Total URLs tested: {len(results)}",
            f"Total requests: {total_requests}",
            f"Overall success rate: {success_rate:.1f}%",
            f"Average response time: {average:.2f}ms",
        ]
    )


__all__ = [
    "format_benchmark_result",
    "format_benchmark_summary",
    "format_ping_result",
    "format_probe_result",
    "format_response_time",
    "format_results_table",
]
