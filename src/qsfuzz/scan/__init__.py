# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .dispatcher import BaselineCache, Dispatcher
from .report import export_results, format_progress, format_summary
from .stats import RunStats

__all__ = [
    "BaselineCache",
    "Dispatcher",
    "RunStats",
    "export_results",
    "format_progress",
    "format_summary",
]
