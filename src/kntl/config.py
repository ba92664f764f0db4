# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for KNTL."""

import os
from dataclasses import dataclass, replace

from .version import __version__

DEFAULT_USER_AGENT = f"KNTL/{__version__} (Key Network Testing Library)"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass(frozen=True)
class HttpSettings:
    """
    HTTP client defaults shared read-only by every probe in a run.

    Durations are milliseconds.
    """

    timeout: float = 10000.0
    max_redirects: int = 5
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    tls_probe_timeout: float | None = None
    max_body_bytes: int = 16 * 1024 * 1024

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0

    @property
    def tls_probe_timeout_seconds(self) -> float:
        timeout = self.tls_probe_timeout if self.tls_probe_timeout is not None else self.timeout
        return timeout / 1000.0

    def with_overrides(self, **changes) -> "HttpSettings":
        """Return a copy with the non-None ``changes`` applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("KNTL_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_redirects = _int_env("KNTL_HTTP_MAX_REDIRECTS", cls.max_redirects)
        if max_redirects < 0:
            max_redirects = cls.max_redirects
        max_body_bytes = _int_env("KNTL_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=timeout,
            max_redirects=max_redirects,
            user_agent=os.getenv("KNTL_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("KNTL_HTTP_VERIFY_SSL", cls.verify_ssl),
            tls_probe_timeout=_optional_float_env("KNTL_TLS_PROBE_TIMEOUT", cls.tls_probe_timeout),
            max_body_bytes=max_body_bytes,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
