# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Progress/summary formatting and results export."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from ..models.evaluation import EvaluationResult, RunSummary


def format_progress(summary: RunSummary) -> str:
    return (
        f"{summary.requests_sent} requests sent, {summary.requests_failed} failed: "
        f"{summary.requests_per_second} requests per second"
    )


def format_summary(summary: RunSummary) -> str:
    line = (
        f"Finished: {summary.matches} successful matches, {summary.requests_sent} requests sent, "
        f"{summary.requests_failed} failed, average {summary.requests_per_second} requests per second"
    )
    if summary.failures_by_category:
        breakdown = ", ".join(f"{name}={count}" for name, count in sorted(summary.failures_by_category.items()))
        line += f" ({breakdown})"
    return line


def results_to_list(results: Iterable[EvaluationResult]) -> list[dict]:
    return [result.to_dict() for result in results]


def export_results(results: Iterable[EvaluationResult], path: str | Path) -> int:
    """Write confirmed matches as a JSON list; returns the number written."""
    payload = results_to_list(results)
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
        handle.write("\n")
    return len(payload)


__all__ = ["export_results", "format_progress", "format_summary", "results_to_list"]
