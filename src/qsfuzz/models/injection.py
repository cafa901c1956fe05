# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Injection and task models."""

from __future__ import annotations

from dataclasses import dataclass

from .rule import Rule


@dataclass(frozen=True)
class UrlInjection:
    """
    Baseline/injected/heuristic URL triple for one mutation point.

    The three URLs differ at most in the value of ``parameter``.
    """

    baseline_url: str
    injected_url: str
    heuristics_url: str | None = None
    parameter: str = ""


@dataclass(frozen=True)
class Task:
    """Unit of dispatch; independent of every other task."""

    injection: UrlInjection
    rule: Rule
    rule_name: str
