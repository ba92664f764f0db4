# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Outcome of a single preliminary timing phase (DNS lookup, TLS handshake)."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import FailureKind


@dataclass(frozen=True)
class PhaseTiming:
    ok: bool
    elapsed: float
    address: str | None = None
    failure_kind: FailureKind | None = None
    error: str | None = None
