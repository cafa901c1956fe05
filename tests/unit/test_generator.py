# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from urllib.parse import quote_plus, urlsplit

import pytest

from qsfuzz.errors import QueryParseError
from qsfuzz.fuzz.generator import encode_query, generate_injections, parse_query
from qsfuzz.models.rule import HeuristicsRule, Rule


def _query(url):
    return parse_query(urlsplit(url).query)


def _changed_params(baseline, other):
    base = _query(baseline)
    mutated = _query(other)
    assert base.keys() == mutated.keys()
    return [name for name in base if base[name] != mutated[name]]


def test_parse_query_keeps_order_and_blank_values():
    params = parse_query("b=2&a=1&b=3&empty=&flag")
    assert list(params) == ["b", "a", "empty", "flag"]
    assert params["b"] == ["2", "3"]
    assert params["empty"] == [""]
    assert params["flag"] == [""]
    assert parse_query("q=a+b%21") == {"q": ["a b!"]}


@pytest.mark.parametrize("raw", ["id=%zz", "id=5%", "a=1;b=2"])
def test_parse_query_rejects_malformed_input(raw):
    with pytest.raises(QueryParseError):
        parse_query(raw)


def test_encode_query_decoded_mode():
    params = {"q": ["<a b>"]}
    assert encode_query(params) == "q=%3Ca+b%3E"
    assert encode_query(params, decoded=True) == "q=<a b>"


def test_one_injection_per_payload_and_parameter():
    url = "http://x.com/a?id=5&q=test&page=2"
    rule = Rule(injections=("P1", "P2"))
    injections = generate_injections(url, rule)

    assert len(injections) == 2 * 3
    for injection in injections:
        assert injection.baseline_url == url
        assert injection.heuristics_url is None
        assert _changed_params(url, injection.injected_url) == [injection.parameter]
    assert [i.parameter for i in injections] == ["id", "q", "page", "id", "q", "page"]


def test_injected_value_is_query_encoded():
    injections = generate_injections("http://x.com/a?id=5", Rule(injections=("' OR 1=1",)))
    assert [i.injected_url for i in injections] == ["http://x.com/a?id=%27+OR+1%3D1"]


def test_mutations_do_not_leak_between_parameters():
    url = "http://x.com/a?a=1&b=2"
    first, second = generate_injections(url, Rule(injections=("X",)))
    assert _query(first.injected_url) == {"a": ["X"], "b": ["2"]}
    assert _query(second.injected_url) == {"a": ["1"], "b": ["X"]}


def test_multi_valued_parameter_only_first_occurrence_is_mutated():
    url = "http://x.com/a?a=1&a=2&b=3"
    injections = generate_injections(url, Rule(injections=("X",)))
    assert len(injections) == 2
    assert _query(injections[0].injected_url) == {"a": ["X", "2"], "b": ["3"]}
    assert _query(injections[1].injected_url) == {"a": ["1", "2"], "b": ["X"]}


def test_original_value_is_resolved_per_parameter():
    url = "http://x.com/a?id=5&name=bob"
    injections = generate_injections(url, Rule(injections=("[[originalvalue]]'",)))
    assert _query(injections[0].injected_url)["id"] == ["5'"]
    assert _query(injections[1].injected_url)["name"] == ["bob'"]


def test_url_tokens_are_expanded_against_the_whole_url():
    url = "http://x.com/a?next=home"
    injections = generate_injections(url, Rule(injections=("[[fullurl]]",)))
    assert _query(injections[0].injected_url)["next"] == [quote_plus(url)]


def test_extra_params_are_appended_when_absent():
    rule = Rule(injections=("http://169.254.169.254/",), extra_params=("url", "id"))
    injections = generate_injections("http://x.com/fetch?id=1", rule)
    assert [i.parameter for i in injections] == ["id", "url"]
    assert _query(injections[0].injected_url) == {"id": ["http://169.254.169.254/"], "url": [""]}
    assert _query(injections[1].injected_url) == {"id": ["1"], "url": ["http://169.254.169.254/"]}

    bare = generate_injections("http://x.com/fetch", Rule(injections=("X",), extra_params=("url",)))
    assert [i.injected_url for i in bare] == ["http://x.com/fetch?url=X"]
    assert bare[0].baseline_url == "http://x.com/fetch"


def test_url_without_parameters_yields_nothing():
    assert generate_injections("http://x.com/a", Rule(injections=("X",))) == []


def test_heuristics_url_mutates_the_same_parameter():
    rule = Rule(injections=("'\"",), heuristics=HeuristicsRule(injection="[[originalvalue]]zz"))
    url = "http://x.com/a?id=5&q=1"
    injections = generate_injections(url, rule)
    assert len(injections) == 2
    for injection in injections:
        assert _changed_params(url, injection.heuristics_url) == [injection.parameter]
    assert _query(injections[0].heuristics_url) == {"id": ["5zz"], "q": ["1"]}


def test_decoded_params_mode_sends_raw_values():
    injections = generate_injections("http://x.com/a?q=1", Rule(injections=("<a b>",)), decoded_params=True)
    assert injections[0].injected_url == "http://x.com/a?q=<a b>"


def test_fragment_is_preserved():
    injections = generate_injections("http://x.com/a?q=1#top", Rule(injections=("X",)))
    assert injections[0].injected_url == "http://x.com/a?q=X#top"


def test_unparseable_query_raises():
    with pytest.raises(QueryParseError):
        generate_injections("http://x.com/a?id=%zz", Rule(injections=("X",)))


def test_non_utf8_escapes_survive_mutation_of_other_parameters():
    url = "http://x.com/search?q=caf%E9&page=2"
    injections = generate_injections(url, Rule(injections=("X", "[[originalvalue]]!")))

    page_mutation = next(i for i in injections if i.parameter == "page")
    assert urlsplit(page_mutation.injected_url).query == "q=caf%E9&page=X"
    assert _changed_params(url, page_mutation.injected_url) == ["page"]

    original_value = [i for i in injections if i.parameter == "q"][1]
    assert urlsplit(original_value.injected_url).query == "q=caf%E9%21&page=2"
