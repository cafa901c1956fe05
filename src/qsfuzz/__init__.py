# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
qsfuzz package entrypoint.

qsfuzz injects rule-defined payloads into URL query parameters one parameter at a
time, sends the mutated requests through a bounded worker pool and reports the
responses that satisfy the rule's expectations. HTTP behavior is abstracted behind
an injectable client interface, and domain objects are modeled with frozen
dataclasses so rules can be shared between worker threads.
"""

from .config import FuzzSettings, HttpSettings, load_fuzz_settings, load_http_settings
from .errors import ConfigError, NotificationError, QueryParseError
from .fuzz import evaluate, generate_injections
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, StubHttpClient, create_default_http_client
from .loader import load_config, parse_config
from .log import setup_logging
from .models import EvaluationResult, FuzzConfig, Rule, RuleEvaluation, RunSummary, Task, UrlInjection
from .runtime import QsFuzz
from .scan import Dispatcher
from .sources import read_urls
from .templating import TemplateContext, expand
from .version import __version__

__all__ = [
    "ConfigError",
    "Dispatcher",
    "EvaluationResult",
    "FuzzConfig",
    "FuzzSettings",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "NotificationError",
    "QsFuzz",
    "QueryParseError",
    "Rule",
    "RuleEvaluation",
    "RunSummary",
    "StubHttpClient",
    "Task",
    "TemplateContext",
    "UrlInjection",
    "create_default_http_client",
    "evaluate",
    "expand",
    "generate_injections",
    "load_config",
    "load_fuzz_settings",
    "load_http_settings",
    "parse_config",
    "read_urls",
    "setup_logging",
    "__version__",
]
