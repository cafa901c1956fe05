# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Evaluation verdicts and run-level results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class RuleEvaluation:
    checks_matched: int = 0
    successful: bool = False
    success_message: str = ""


@dataclass(frozen=True)
class EvaluationResult:
    """A confirmed match kept for end-of-run export."""

    rule_name: str
    rule_description: str
    injected_url: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RunSummary:
    """Snapshot of run-level counters."""

    requests_sent: int = 0
    requests_failed: int = 0
    urls_skipped: int = 0
    matches: int = 0
    elapsed: float = 0.0
    failures_by_category: dict[str, int] = field(default_factory=dict)

    @property
    def requests_per_second(self) -> int:
        if self.elapsed <= 0:
            return 0
        return int(self.requests_sent / self.elapsed)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["requests_per_second"] = self.requests_per_second
        return data
