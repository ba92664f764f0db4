# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe and ping result models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..errors import FailureKind


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of one request attempt.

    ``status_code``/``status_text`` are only set when the HTTP exchange completed (any
    status, 4xx/5xx included). ``error`` is only set when it did not. ``response_time`` is
    always recorded, in milliseconds, up to the terminal outcome.
    """

    url: str
    response_time: float
    success: bool
    timestamp: datetime
    status_code: int | None = None
    status_text: str | None = None
    error: str | None = None
    failure_kind: FailureKind | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "status_code": self.status_code,
            "status_text": self.status_text,
            "response_time": self.response_time,
            "success": self.success,
            "error": self.error,
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class PingResult(ProbeResult):
    """ProbeResult plus the preliminary DNS and TLS phase timings.

    ``dns_lookup_time`` is 0.0 when resolution failed. ``tls_handshake_time`` is ``None``
    for plaintext targets and when the handshake probe failed.
    """

    dns_lookup_time: float = 0.0
    tls_handshake_time: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["dns_lookup_time"] = self.dns_lookup_time
        data["tls_handshake_time"] = self.tls_handshake_time
        return data
