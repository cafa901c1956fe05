# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Injection generation and response evaluation."""

from .evaluator import display_url, evaluate, length_within_tolerance
from .generator import encode_query, generate_injections, parse_query

__all__ = [
    "display_url",
    "encode_query",
    "evaluate",
    "generate_injections",
    "length_within_tolerance",
    "parse_query",
]
