# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers applied by callers before handing targets to the engines."""

from __future__ import annotations

from urllib.parse import urlparse

DEFAULT_SCHEME = "https"
TLS_SCHEMES = frozenset({"https"})
DEFAULT_TLS_PORT = 443


def is_valid_url(url: str) -> bool:
    """Return True for an absolute URL with both a scheme and a host."""
    try:
        parsed = urlparse(str(url or ""))
        # Touching .port validates it (raises ValueError when out of range).
        parsed.port
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.hostname)


def normalize_url(url: str) -> str:
    """Prefix ``https://`` when the URL carries no scheme separator."""
    raw = str(url or "").strip()
    if "://" not in raw:
        return f"{DEFAULT_SCHEME}://{raw}"
    return raw


def uses_tls(url: str) -> bool:
    return urlparse(str(url or "")).scheme.lower() in TLS_SCHEMES


def host_and_tls_port(url: str) -> tuple[str, int]:
    """
    Hostname plus the port a TLS handshake probe should use.

    Without an explicit port this is always 443, whatever the scheme.
    """
    parsed = urlparse(str(url or ""))
    try:
        port = parsed.port
    except ValueError:
        port = None
    return parsed.hostname or "", port or DEFAULT_TLS_PORT


__all__ = [
    "DEFAULT_TLS_PORT",
    "host_and_tls_port",
    "is_valid_url",
    "normalize_url",
    "uses_tls",
]
