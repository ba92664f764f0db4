# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Hostname resolution, timed in isolation from the HTTP exchange."""

from __future__ import annotations

import asyncio
import logging
import socket
import time

from ..errors import describe_exception
from ..timing import elapsed_ms
from .models import PhaseTiming

logger = logging.getLogger(__name__)


async def resolve(hostname: str) -> str:
    """Resolve ``hostname`` through the system resolver and return the first address."""
    if not hostname:
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
    if not infos:
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
    return str(infos[0][4][0])


async def timed_lookup(hostname: str, *, timeout: float | None = None) -> PhaseTiming:
    """Time one resolution of ``hostname``; ``timeout`` is in seconds. Never raises."""
    start = time.perf_counter()
    try:
        lookup = resolve(hostname)
        address = await (asyncio.wait_for(lookup, timeout) if timeout else lookup)
    except Exception as exc:  # noqa: BLE001
        kind, message = describe_exception(exc)
        logger.debug("DNS lookup for %s failed: %s", hostname, exc)
        return PhaseTiming(ok=False, elapsed=elapsed_ms(start), failure_kind=kind, error=message)
    return PhaseTiming(ok=True, elapsed=elapsed_ms(start), address=address)


__all__ = ["resolve", "timed_lookup"]
