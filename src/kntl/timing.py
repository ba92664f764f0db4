# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Monotonic timing primitives shared by every probe phase."""

from __future__ import annotations

import time
from datetime import datetime, timezone


def elapsed_ms(start: float) -> float:
    """Milliseconds since ``start`` (a ``time.perf_counter()`` reading), never negative."""
    return max(0.0, (time.perf_counter() - start) * 1000.0)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Stopwatch:
    """Wall-clock start instant plus a monotonic elapsed-time reading."""

    def __init__(self) -> None:
        self.started_at = utc_now()
        self._start = time.perf_counter()

    def elapsed_ms(self) -> float:
        return elapsed_ms(self._start)

    def elapsed_seconds(self) -> float:
        return self.elapsed_ms() / 1000.0


__all__ = ["Stopwatch", "elapsed_ms", "utc_now"]
