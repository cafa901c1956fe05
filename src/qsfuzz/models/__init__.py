# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for qsfuzz."""

from ..http.models import HttpRequest, HttpResponse
from .config import FuzzConfig, SlackConfig
from .evaluation import EvaluationResult, RuleEvaluation, RunSummary
from .injection import Task, UrlInjection
from .rule import BASELINE_CATEGORIES, ExpectedResponse, HeuristicsRule, Rule

__all__ = [
    "BASELINE_CATEGORIES",
    "EvaluationResult",
    "ExpectedResponse",
    "FuzzConfig",
    "HeuristicsRule",
    "HttpRequest",
    "HttpResponse",
    "Rule",
    "RuleEvaluation",
    "RunSummary",
    "SlackConfig",
    "Task",
    "UrlInjection",
]
