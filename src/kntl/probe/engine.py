# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe engine: single timed HTTP requests and phase-timed pings."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from urllib.parse import urlparse

from ..config import HttpSettings, load_http_settings
from ..errors import FailureKind, describe_exception, failure_message
from ..http.client import HttpClient, create_default_http_client
from ..http.models import HttpRequest, HttpResponse
from ..http.url import host_and_tls_port, uses_tls
from ..models import PingResult, ProbeResult, RequestOptions
from ..net import PhaseTiming, measure_handshake, timed_lookup
from ..timing import Stopwatch, utc_now

logger = logging.getLogger(__name__)

Resolver = Callable[..., Awaitable[PhaseTiming]]
HandshakeProber = Callable[..., Awaitable[PhaseTiming]]


def build_http_request(url: str, options: RequestOptions) -> HttpRequest:
    """Translate probe options into a transport request."""
    body = None
    json_payload = None
    if isinstance(options.data, (str, bytes)):
        body = options.data
    elif options.data is not None:
        json_payload = options.data
    return HttpRequest(
        url=url,
        method=(options.method or "GET").upper(),
        headers=dict(options.headers or {}),
        body=body,
        json=json_payload,
        timeout=options.timeout,
        max_redirects=options.max_redirects,
    )


class ProbeEngine:
    """
    Issues single requests and classifies their outcome.

    Per-request failures never escape: every call resolves to a result whose ``error``
    carries the classification. The DNS resolver and TLS handshake prober are injectable
    so pings can be exercised without a network.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        settings: HttpSettings | None = None,
        *,
        resolver: Resolver = timed_lookup,
        handshake_prober: HandshakeProber = measure_handshake,
    ):
        self.settings = settings or load_http_settings()
        self._owns_client = http_client is None
        self.http_client = http_client or create_default_http_client(self.settings)
        self._resolver = resolver
        self._handshake_prober = handshake_prober

    async def aclose(self) -> None:
        """Close the HTTP client if this engine created it; injected clients belong to the caller."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> ProbeEngine:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def probe(self, url: str, options: RequestOptions | None = None) -> ProbeResult:
        """Issue one request and return its classified, timed result."""
        watch = Stopwatch()
        response = await self._exchange(url, options or RequestOptions())
        return self._assemble(ProbeResult, url, response, watch.elapsed_ms(), watch.started_at)

    async def ping(self, url: str) -> PingResult:
        """
        GET ``url`` after timing a DNS lookup and, for https, a TLS handshake.

        Both preliminary phases are best-effort: a failed lookup records 0.0 and the GET
        is still attempted, a failed handshake leaves ``tls_handshake_time`` unset.
        """
        started_at = utc_now()
        hostname = urlparse(url).hostname or ""

        lookup = await self._resolver(hostname, timeout=self.settings.timeout_seconds)
        dns_lookup_time = lookup.elapsed if lookup.ok else 0.0
        if not lookup.ok:
            logger.debug("Continuing ping of %s after DNS failure: %s", url, lookup.error)

        tls_handshake_time = None
        if uses_tls(url):
            host, port = host_and_tls_port(url)
            handshake = await self._handshake_prober(host, port, timeout=self.settings.tls_probe_timeout_seconds)
            if handshake.ok:
                tls_handshake_time = handshake.elapsed

        watch = Stopwatch()
        response = await self._exchange(url, RequestOptions(method="GET"))
        return self._assemble(
            PingResult,
            url,
            response,
            watch.elapsed_ms(),
            started_at,
            dns_lookup_time=dns_lookup_time,
            tls_handshake_time=tls_handshake_time,
        )

    async def _exchange(self, url: str, options: RequestOptions) -> HttpResponse:
        request = build_http_request(url, options)
        try:
            return await self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            # HttpClient implementations should not raise; classify anyway.
            kind, message = describe_exception(exc)
            return HttpResponse(ok=False, url=url, failure_kind=kind, error_message=message, error_type=type(exc).__name__)

    @staticmethod
    def _assemble(
        result_cls: type[ProbeResult],
        url: str,
        response: HttpResponse,
        response_time: float,
        timestamp: datetime,
        **extra,
    ):
        if response.ok and response.status_code is not None:
            return result_cls(
                url=url,
                response_time=response_time,
                success=response.is_success_status,
                timestamp=timestamp,
                status_code=response.status_code,
                status_text=response.reason_phrase or "",
                **extra,
            )

        kind = response.failure_kind or FailureKind.UNKNOWN
        error = response.error_message or failure_message(kind)
        logger.debug("Probe of %s failed after %.1fms: %s", url, response_time, error)
        return result_cls(
            url=url,
            response_time=response_time,
            success=False,
            timestamp=timestamp,
            error=error,
            failure_kind=kind,
            **extra,
        )


__all__ = ["ProbeEngine", "build_http_request"]
