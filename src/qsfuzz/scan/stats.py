# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run-level counters shared by all worker threads."""

from __future__ import annotations

import threading
import time
from collections import Counter

from ..models.evaluation import RunSummary


class RunStats:
    """Lock-guarded counters; every mutator returns the value after the update."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._started = time.monotonic()
        self._sent = 0
        self._failed = 0
        self._skipped = 0
        self._matches = 0
        self._failure_categories: Counter[str] = Counter()

    def record_sent(self) -> int:
        with self._lock:
            self._sent += 1
            return self._sent

    def record_failure(self, category: str | None = None) -> int:
        with self._lock:
            self._failed += 1
            self._failure_categories[category or "UNKNOWN_ERROR"] += 1
            return self._failed

    def record_skipped(self) -> int:
        with self._lock:
            self._skipped += 1
            return self._skipped

    def record_match(self) -> int:
        with self._lock:
            self._matches += 1
            return self._matches

    def snapshot(self) -> RunSummary:
        with self._lock:
            return RunSummary(
                requests_sent=self._sent,
                requests_failed=self._failed,
                urls_skipped=self._skipped,
                matches=self._matches,
                elapsed=time.monotonic() - self._started,
                failures_by_category=dict(self._failure_categories),
            )
