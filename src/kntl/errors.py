# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import asyncio
import errno
import socket
import ssl as ssl_module
from enum import Enum

import httpx


class InvalidArgumentError(ValueError):
    """Raised for caller mistakes detected before any network work starts."""


class FailureKind(str, Enum):
    DNS = "DNS"
    REFUSED = "REFUSED"
    TIMEOUT = "TIMEOUT"
    NETWORK = "NETWORK"
    NON_NETWORK = "NON_NETWORK"
    UNKNOWN = "UNKNOWN"


DNS_FAILED = "DNS resolution failed"
CONNECTION_REFUSED = "Connection refused"
REQUEST_TIMEOUT = "Request timeout"
NETWORK_ERROR = "Network error"
UNKNOWN_ERROR = "Unknown error"


def _exception_chain(exc: BaseException):
    # Causes, contexts and exception-group members (anyio groups per-address connect errors).
    seen: set[int] = set()
    pending: list[BaseException] = [exc]
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.extend(getattr(current, "exceptions", None) or ())
        linked = current.__cause__ or current.__context__
        if linked is not None:
            pending.append(linked)


def _is_dns_failure(exc: BaseException) -> bool:
    if isinstance(exc, (socket.gaierror, socket.herror)):
        return True
    # httpcore/anyio re-raise resolver errors as plain OSErrors with the gai message.
    message = str(exc).lower()
    return any(
        marker in message
        for marker in (
            "name or service not known",
            "nodename nor servname provided",
            "no address associated with hostname",
            "temporary failure in name resolution",
            "getaddrinfo failed",
        )
    )


def _is_refused(exc: BaseException) -> bool:
    if isinstance(exc, ConnectionRefusedError):
        return True
    if getattr(exc, "errno", None) == errno.ECONNREFUSED:
        return True
    message = str(exc).lower()
    return "connection refused" in message or "actively refused" in message


def categorize_exception(exc: object) -> FailureKind:
    """
    Map Python/httpx exceptions to a FailureKind.

    The whole ``__cause__``/``__context__`` chain is inspected since httpx wraps the
    socket-level error that carries the actual reason.
    """
    if not isinstance(exc, BaseException):
        return FailureKind.UNKNOWN

    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError, socket.timeout)):
        return FailureKind.TIMEOUT

    is_transport = isinstance(
        exc,
        (httpx.TransportError, httpx.TooManyRedirects, ssl_module.SSLError, ssl_module.CertificateError, OSError),
    )
    if not is_transport:
        return FailureKind.NON_NETWORK if isinstance(exc, Exception) else FailureKind.UNKNOWN

    chain = list(_exception_chain(exc))
    if any(_is_dns_failure(item) for item in chain):
        return FailureKind.DNS
    if any(_is_refused(item) for item in chain):
        return FailureKind.REFUSED
    if any(isinstance(item, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)) for item in chain[1:]):
        return FailureKind.TIMEOUT
    return FailureKind.NETWORK


def failure_message(kind: FailureKind, message: str | None = None) -> str:
    """User-facing classification string for a failure."""
    if kind == FailureKind.DNS:
        return DNS_FAILED
    if kind == FailureKind.REFUSED:
        return CONNECTION_REFUSED
    if kind == FailureKind.TIMEOUT:
        return REQUEST_TIMEOUT
    if kind == FailureKind.NETWORK:
        return message or NETWORK_ERROR
    if kind == FailureKind.NON_NETWORK:
        return message or UNKNOWN_ERROR
    return UNKNOWN_ERROR


def describe_exception(exc: object) -> tuple[FailureKind, str]:
    """Categorize ``exc`` and return its kind plus classification string."""
    kind = categorize_exception(exc)
    return kind, failure_message(kind, str(exc) if isinstance(exc, BaseException) else None)


__all__ = [
    "CONNECTION_REFUSED",
    "DNS_FAILED",
    "FailureKind",
    "InvalidArgumentError",
    "NETWORK_ERROR",
    "REQUEST_TIMEOUT",
    "UNKNOWN_ERROR",
    "categorize_exception",
    "describe_exception",
    "failure_message",
]
