# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across KNTL."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import FailureKind

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations.

    ``timeout`` is in milliseconds; ``None`` defers to the client's settings.
    """

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    json: Any = None
    timeout: float | None = None
    max_redirects: int | None = None


@dataclass
class HttpResponse:
    """Outcome of one HTTP exchange.

    ``ok`` means the exchange completed (any status code). Transport failures carry
    ``failure_kind`` and ``error_message`` instead of a status.
    """

    ok: bool
    status_code: int | None = None
    reason_phrase: str | None = None
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    redirect_count: int = 0
    failure_kind: FailureKind | None = None
    error_message: str | None = None
    error_type: str | None = None
    body_bytes_read: int = 0
    body_truncated: bool = False

    @property
    def is_success_status(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 400
