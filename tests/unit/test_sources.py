# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from qsfuzz.sources import dedup_key, read_urls


def test_urls_differing_only_in_values_are_deduplicated():
    urls = read_urls(["http://a.com/p?x=1&y=2", "http://a.com/p?x=9&y=2", "http://a.com/p?y=3&x=4"])
    assert urls == ["http://a.com/p?x=1&y=2"]


def test_different_parameter_names_stay_distinct():
    urls = read_urls(["http://a.com/p?x=1", "http://a.com/p?y=1", "http://a.com/q?x=1", "http://b.com/p?x=1"])
    assert urls == ["http://a.com/p?x=1", "http://a.com/p?y=1", "http://a.com/q?x=1", "http://b.com/p?x=1"]


def test_port_is_not_part_of_the_key():
    assert dedup_key("http://a.com:8080/p?x=1") == dedup_key("http://A.com/p?x=2")


def test_urls_without_query_need_extra_params():
    lines = ["http://a.com/", "http://a.com/p?x=1"]
    assert read_urls(lines) == ["http://a.com/p?x=1"]
    assert read_urls(lines, allow_without_query=True) == lines


def test_blank_and_malformed_lines_are_dropped():
    lines = ["", "   ", "not a url", "/relative?x=1", "http://[::1/p?x=1", "  https://ok.com/a?b=1\n"]
    assert read_urls(lines) == ["https://ok.com/a?b=1"]
