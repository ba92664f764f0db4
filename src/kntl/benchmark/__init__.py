# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .engine import BenchmarkEngine, plan_batches

__all__ = ["BenchmarkEngine", "plan_batches"]
