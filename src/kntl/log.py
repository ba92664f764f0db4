# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for the KNTL CLI and library callers."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("KNTL_LOG_LEVEL", "WARNING").upper()

# httpx logs every request at INFO; a benchmark would drown its own output.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | None = None) -> int:
    """Numeric level for ``level`` (or ``KNTL_LOG_LEVEL``); unknown names mean WARNING."""
    name = (level or DEFAULT_LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> int:
    """Configure root logging and keep transport loggers quiet unless running at DEBUG."""
    effective_level = resolve_level(level)
    logging.basicConfig(level=effective_level, format="%(levelname)s %(name)s: %(message)s")
    transport_level = logging.DEBUG if effective_level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective_level


__all__ = ["resolve_level", "setup_logging"]
