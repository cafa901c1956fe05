# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from qsfuzz.fuzz.evaluator import display_url, evaluate, length_within_tolerance
from qsfuzz.http.models import HttpResponse
from qsfuzz.models.injection import UrlInjection
from qsfuzz.models.rule import ExpectedResponse, HeuristicsRule, Rule

INJECTION = UrlInjection(
    baseline_url="http://x.com/a?id=5",
    injected_url="http://x.com/a?id=%27+OR+1%3D1",
    heuristics_url="http://x.com/a?id=5zz",
    parameter="id",
)


def make_response(status=200, body="", headers=None):
    return HttpResponse.from_mapping({"ok": True, "status_code": status, "body": body, "headers": headers or {}})


def make_rule(baseline_matches=(), **expectation):
    heuristics = HeuristicsRule()
    if baseline_matches:
        heuristics = HeuristicsRule(injection="zz", baseline_matches=frozenset(baseline_matches))
    return Rule(
        description="test rule",
        injections=("' OR 1=1",),
        expectation=ExpectedResponse(**expectation),
        heuristics=heuristics,
    )


def test_content_match_is_case_insensitive_and_builds_message():
    rule = make_rule(contents=("sql syntax",))
    result = evaluate(make_response(body="Warning: SQL Syntax Error near"), INJECTION, rule, "sqli")
    assert result.successful is True
    assert result.checks_matched == 1
    assert result.success_message == "[sqli] successful match for http://x.com/a?id=' OR 1=1"


def test_categories_are_anded_and_items_are_ored():
    response = make_response(status=200, body="sql syntax")
    both = make_rule(contents=("sql syntax",), codes=("500",))
    only_content = make_rule(contents=("nothing here", "sql syntax"))

    failed = evaluate(response, INJECTION, both, "r")
    assert failed.successful is False
    assert failed.checks_matched == 1
    assert failed.success_message == ""

    assert evaluate(response, INJECTION, only_content, "r").successful is True


def test_status_codes_skip_non_numeric_entries():
    rule = make_rule(codes=("abc", " 302 "))
    assert evaluate(make_response(status=302), INJECTION, rule, "r").successful is True
    assert evaluate(make_response(status=200), INJECTION, rule, "r").successful is False


def test_header_match_is_case_insensitive():
    rule = make_rule(headers={"Location": "evil.example"})
    response = make_response(status=302, headers={"location": "https://EVIL.example/landing"})
    assert evaluate(response, INJECTION, rule, "redirect").successful is True
    assert evaluate(make_response(status=302), INJECTION, rule, "redirect").successful is False


@pytest.mark.parametrize(
    ("observed", "matched"),
    [(110, True), (90, True), (100, True), (111, False), (89, False), (0, False)],
)
def test_length_tolerance_boundary(observed, matched):
    rule = make_rule(lengths=("100",))
    response = make_response(body="a" * observed)
    assert evaluate(response, INJECTION, rule, "len").successful is matched
    assert length_within_tolerance(100, observed) is matched


def test_zero_length_never_matches():
    assert length_within_tolerance(0, 0) is False
    assert evaluate(make_response(body=""), INJECTION, make_rule(lengths=("0", "5")), "r").successful is False


def test_all_four_categories():
    rule = make_rule(
        contents=("root:",),
        codes=("200",),
        headers={"Content-Type": "text/plain"},
        lengths=("20",),
    )
    response = make_response(status=200, body="root:x:0:0:root:/bin", headers={"Content-Type": "text/plain"})
    result = evaluate(response, INJECTION, rule, "lfi")
    assert result.successful is True
    assert result.checks_matched == 4


def test_rule_without_expectations_never_succeeds():
    result = evaluate(make_response(body="anything"), INJECTION, make_rule(), "empty")
    assert result.successful is False
    assert result.checks_matched == 0


def test_status_code_false_positive_is_suppressed():
    rule = make_rule(baseline_matches={"responsecode"}, codes=("500",))
    result = evaluate(
        make_response(status=500),
        INJECTION,
        rule,
        "r",
        heuristics_response=make_response(status=500),
        baseline_response=make_response(status=500),
    )
    assert result.successful is False


def test_status_code_corroborated_when_control_matches_baseline():
    rule = make_rule(baseline_matches={"responsecode"}, codes=("500",))
    ok = evaluate(
        make_response(status=500),
        INJECTION,
        rule,
        "r",
        heuristics_response=make_response(status=200),
        baseline_response=make_response(status=200),
    )
    assert ok.successful is True

    diverged = evaluate(
        make_response(status=500),
        INJECTION,
        rule,
        "r",
        heuristics_response=make_response(status=404),
        baseline_response=make_response(status=200),
    )
    assert diverged.successful is False


def test_content_corroboration_requires_identical_control_body():
    rule = make_rule(baseline_matches={"responsecontent"}, contents=("error",))
    injected = make_response(body="fatal error")
    assert evaluate(
        injected, INJECTION, rule, "r",
        heuristics_response=make_response(body="page"),
        baseline_response=make_response(body="page"),
    ).successful is True
    assert evaluate(
        injected, INJECTION, rule, "r",
        heuristics_response=make_response(body="page 2"),
        baseline_response=make_response(body="page"),
    ).successful is False


def test_header_corroboration_compares_full_header_set():
    rule = make_rule(baseline_matches={"responseheader"}, headers={"X-Debug": "trace"})
    injected = make_response(headers={"X-Debug": "trace on"})
    same = evaluate(
        injected, INJECTION, rule, "r",
        heuristics_response=make_response(headers={"Server": "nginx"}),
        baseline_response=make_response(headers={"server": "nginx"}),
    )
    assert same.successful is True
    different = evaluate(
        injected, INJECTION, rule, "r",
        heuristics_response=make_response(headers={"Server": "nginx", "X-Extra": "1"}),
        baseline_response=make_response(headers={"Server": "nginx"}),
    )
    assert different.successful is False


def test_length_corroboration_uses_tolerance():
    rule = make_rule(baseline_matches={"responselength"}, lengths=("50",))
    injected = make_response(body="b" * 50)
    assert evaluate(
        injected, INJECTION, rule, "r",
        heuristics_response=make_response(body="a" * 105),
        baseline_response=make_response(body="a" * 100),
    ).successful is True
    assert evaluate(
        injected, INJECTION, rule, "r",
        heuristics_response=make_response(body="a" * 200),
        baseline_response=make_response(body="a" * 100),
    ).successful is False


def test_corroboration_without_control_responses_fails():
    rule = make_rule(baseline_matches={"responsecontent"}, contents=("error",))
    assert evaluate(make_response(body="error"), INJECTION, rule, "r").successful is False


def test_uncorroborated_categories_are_unaffected_by_baseline_matches():
    rule = make_rule(baseline_matches={"responsecode"}, contents=("error",))
    assert evaluate(make_response(body="error"), INJECTION, rule, "r").successful is True


def test_display_url_decodes_until_stable():
    assert display_url("http://x.com/?a=%253Cb%253E") == "http://x.com/?a=<b>"
    assert display_url("http://x.com/?a=100%") == "http://x.com/?a=100%"
    assert display_url("http://x.com/?a=x+y") == "http://x.com/?a=x y"
