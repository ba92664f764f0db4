# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import asyncio
import logging

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import describe_exception
from .client import HttpClient
from .headers import merge_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Asynchronous httpx client wrapper.

    Redirects are followed here rather than by httpx so the limit can vary per request.
    Each request is bounded by its own ``asyncio.wait_for`` so a hung exchange is torn
    down without touching other requests sharing the client. The pool places no cap
    on open connections: a request queued behind its siblings for a connection would
    otherwise spend its own timeout waiting.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=False,
            timeout=self.settings.timeout_seconds,
            verify=self.settings.verify_ssl,
            limits=httpx.Limits(max_connections=None, max_keepalive_connections=20),
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = merge_headers({"User-Agent": self.settings.user_agent}, request.headers)
        timeout_ms = request.timeout if request.timeout is not None else self.settings.timeout
        max_redirects = request.max_redirects if request.max_redirects is not None else self.settings.max_redirects
        timeout = max(timeout_ms, 0.0) / 1000.0

        try:
            return await asyncio.wait_for(
                self._send(request, headers, timeout=timeout, max_redirects=max_redirects),
                timeout=timeout,
            )
        except Exception as exc:  # noqa: BLE001
            kind, message = describe_exception(exc)
            logger.debug("%s %s failed: %s (%s)", request.method, request.url, message, type(exc).__name__)
            return HttpResponse(
                ok=False,
                url=request.url,
                failure_kind=kind,
                error_message=message,
                error_type=type(exc).__name__,
            )

    async def _send(
        self,
        request: HttpRequest,
        headers: dict[str, str],
        *,
        timeout: float,
        max_redirects: int,
    ) -> HttpResponse:
        outgoing = self._client.build_request(
            request.method.upper(),
            request.url,
            headers=headers,
            content=request.body,
            json=request.json,
            timeout=timeout,
        )
        redirects = 0
        while True:
            response = await self._client.send(outgoing, follow_redirects=False, stream=True)
            next_request = response.next_request
            if next_request is None or max_redirects <= 0:
                try:
                    bytes_read, truncated = await self._drain(response)
                finally:
                    await response.aclose()
                return HttpResponse(
                    ok=True,
                    status_code=response.status_code,
                    reason_phrase=response.reason_phrase,
                    headers=dict(response.headers),
                    url=str(response.url),
                    redirect_count=redirects,
                    body_bytes_read=bytes_read,
                    body_truncated=truncated,
                )
            await response.aclose()
            if redirects >= max_redirects:
                raise httpx.TooManyRedirects("Maximum number of redirects exceeded", request=outgoing)
            redirects += 1
            outgoing = next_request

    async def _drain(self, response: httpx.Response) -> tuple[int, bool]:
        # Body bytes are counted, not kept; reading stops at max_body_bytes.
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024
        bytes_read = 0
        async for chunk in response.aiter_bytes():
            if not chunk:
                continue
            remaining = max_body_bytes - bytes_read
            if len(chunk) > remaining:
                return bytes_read + remaining, True
            bytes_read += len(chunk)
        return bytes_read, False

    async def aclose(self) -> None:
        await self._client.aclose()
