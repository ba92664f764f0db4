# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Socket-level timing probes."""

from .dns import resolve, timed_lookup
from .models import PhaseTiming
from .tls import measure_handshake

__all__ = ["PhaseTiming", "measure_handshake", "resolve", "timed_lookup"]
