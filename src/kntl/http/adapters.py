# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

import asyncio

from ..errors import FailureKind, failure_message
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests and dry runs.

    ``delay`` is in milliseconds and is awaited before every answer, which lets callers
    observe concurrency without a network.
    """

    def __init__(self, responses: dict[str, HttpResponse] | None = None, *, delay: float = 0.0):
        self._responses = responses or {}
        self.delay = delay
        self.requests: list[HttpRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay > 0:
                await asyncio.sleep(self.delay / 1000.0)
        finally:
            self.in_flight -= 1
        if request.url in self._responses:
            return self._responses[request.url]
        return HttpResponse(
            ok=False,
            url=request.url,
            failure_kind=FailureKind.NETWORK,
            error_message=failure_message(FailureKind.NETWORK, "No stubbed response configured"),
        )

    async def aclose(self) -> None:
        self.closed = True
