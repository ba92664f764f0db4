# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .engine import ProbeEngine, build_http_request

__all__ = ["ProbeEngine", "build_http_request"]
