# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Response evaluation.

A rule succeeds when every expectation category it declares is satisfied (AND
across categories); within one category a single matching item is enough (OR).
Categories named in the rule's ``baselineMatches`` additionally require the
heuristic (control) response to agree with the baseline response before a raw
match is trusted.
"""

from __future__ import annotations

from urllib.parse import unquote_plus

from ..http.models import HttpResponse
from ..models.evaluation import RuleEvaluation
from ..models.injection import UrlInjection
from ..models.rule import (
    RESPONSE_CODE,
    RESPONSE_CONTENT,
    RESPONSE_HEADER,
    RESPONSE_LENGTH,
    Rule,
)


def _parse_ints(values: tuple[str, ...]) -> list[int]:
    parsed: list[int] = []
    for value in values:
        try:
            parsed.append(int(str(value).strip()))
        except ValueError:
            continue
    return parsed


def length_within_tolerance(expected: int, observed: int) -> bool:
    """True when ``observed`` is within 10% (inclusive) of ``expected``; zero never matches."""
    if observed == 0:
        return False
    return abs(expected - observed) * 10 <= expected


def display_url(url: str) -> str:
    """Percent-decode repeatedly until the URL stops changing."""
    decoded = unquote_plus(url)
    while "%" in decoded:
        again = unquote_plus(decoded)
        if again == decoded:
            break
        decoded = again
    return decoded


class _Corroboration:
    """Comparisons between the heuristic and the baseline response."""

    def __init__(self, heuristics: HttpResponse | None, baseline: HttpResponse | None):
        self.heuristics = heuristics
        self.baseline = baseline

    @property
    def available(self) -> bool:
        return self.heuristics is not None and self.baseline is not None

    def content(self) -> bool:
        return self.available and self.heuristics.content == self.baseline.content

    def headers(self) -> bool:
        return self.available and self.heuristics.headers == self.baseline.headers

    def length(self) -> bool:
        return self.available and length_within_tolerance(
            self.baseline.content_length, self.heuristics.content_length
        )

    def status(self, tested_code: int) -> bool:
        if not self.available or self.heuristics.status_code != self.baseline.status_code:
            return False
        # The server answers with this code whatever the input is.
        return self.baseline.status_code != tested_code


def _match_content(rule: Rule, response: HttpResponse, corroboration: _Corroboration) -> bool:
    body = response.text.lower()
    for content in rule.expectation.contents or ():
        if content.lower() in body:
            if not rule.heuristics.requires(RESPONSE_CONTENT) or corroboration.content():
                return True
    return False


def _match_status(rule: Rule, response: HttpResponse, corroboration: _Corroboration) -> bool:
    for code in _parse_ints(rule.expectation.codes or ()):
        if code == response.status_code:
            if not rule.heuristics.requires(RESPONSE_CODE) or corroboration.status(code):
                return True
    return False


def _match_headers(rule: Rule, response: HttpResponse, corroboration: _Corroboration) -> bool:
    for name, value in (rule.expectation.headers or {}).items():
        if value.lower() in response.headers.get(name, "").lower():
            if not rule.heuristics.requires(RESPONSE_HEADER) or corroboration.headers():
                return True
    return False


def _match_length(rule: Rule, response: HttpResponse, corroboration: _Corroboration) -> bool:
    for length in _parse_ints(rule.expectation.lengths or ()):
        if length_within_tolerance(length, response.content_length):
            if not rule.heuristics.requires(RESPONSE_LENGTH) or corroboration.length():
                return True
    return False


def evaluate(
    response: HttpResponse,
    injection: UrlInjection,
    rule: Rule,
    rule_name: str,
    heuristics_response: HttpResponse | None = None,
    baseline_response: HttpResponse | None = None,
) -> RuleEvaluation:
    expectation = rule.expectation
    corroboration = _Corroboration(heuristics_response, baseline_response)

    checks = [
        (expectation.contents, _match_content),
        (expectation.codes, _match_status),
        (expectation.headers, _match_headers),
        (expectation.lengths, _match_length),
    ]
    expected = expectation.categories
    matched = 0
    for values, matcher in checks:
        if values is not None and matcher(rule, response, corroboration):
            matched += 1

    if matched == 0 or matched < expected:
        return RuleEvaluation(checks_matched=matched, successful=False)

    message = f"[{rule_name}] successful match for {display_url(injection.injected_url)}"
    return RuleEvaluation(checks_matched=matched, successful=True, success_message=message)


__all__ = ["display_url", "evaluate", "length_within_tolerance"]
