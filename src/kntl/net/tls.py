# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Raw TLS handshake timing.

The connection is opened, timed until the handshake completes, and closed without any
application data. Certificates are not verified: this measures latency, it does not
make trust decisions.
"""

from __future__ import annotations

import asyncio
import logging
import ssl
import time
from contextlib import suppress

from ..errors import describe_exception
from ..timing import elapsed_ms
from .models import PhaseTiming

logger = logging.getLogger(__name__)


def handshake_context() -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


async def measure_handshake(
    host: str,
    port: int,
    *,
    timeout: float | None = None,
    ssl_context: ssl.SSLContext | None = None,
) -> PhaseTiming:
    """Time a TLS handshake against ``host:port``; ``timeout`` is in seconds. Never raises."""
    ctx = ssl_context or handshake_context()
    start = time.perf_counter()
    writer: asyncio.StreamWriter | None = None
    try:
        connect = asyncio.open_connection(host, port, ssl=ctx, server_hostname=host or None)
        _, writer = await (asyncio.wait_for(connect, timeout) if timeout else connect)
        elapsed = elapsed_ms(start)
    except Exception as exc:  # noqa: BLE001
        kind, message = describe_exception(exc)
        logger.debug("TLS handshake with %s:%s failed: %s", host, port, exc)
        return PhaseTiming(ok=False, elapsed=elapsed_ms(start), failure_kind=kind, error=message)
    finally:
        if writer is not None:
            writer.close()
            with suppress(Exception):
                await asyncio.wait_for(writer.wait_closed(), timeout or 1.0)
    return PhaseTiming(ok=True, elapsed=elapsed)


__all__ = ["handshake_context", "measure_handshake"]
