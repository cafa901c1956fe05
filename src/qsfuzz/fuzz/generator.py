# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Injection generation.

For every query parameter of a URL, and for every payload of a rule, one
``UrlInjection`` is produced in which exactly that parameter carries the payload.
Multi-valued parameters are only mutated at their first occurrence; the later
occurrences are sent unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import SplitResult, unquote_plus, urlencode, urlsplit

from ..errors import QueryParseError
from ..models.injection import UrlInjection
from ..models.rule import Rule
from ..templating import TemplateContext, expand

QueryParams = dict[str, list[str]]

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _unescape(component: str) -> str:
    if _BAD_ESCAPE_RE.search(component):
        raise QueryParseError(f"invalid URL escape in {component!r}")
    return unquote_plus(component, errors="surrogateescape")


def parse_query(raw: str) -> QueryParams:
    """
    Parse a raw query string into an ordered name -> values mapping.

    Blank values are kept. Semicolon separators and malformed percent escapes are
    rejected rather than silently repaired.
    """
    params: QueryParams = {}
    for segment in raw.split("&"):
        if not segment:
            continue
        if ";" in segment:
            raise QueryParseError(f"invalid semicolon separator in query segment {segment!r}")
        name, _, value = segment.partition("=")
        params.setdefault(_unescape(name), []).append(_unescape(value))
    return params


def encode_query(params: Mapping[str, list[str]], *, decoded: bool = False) -> str:
    # Undecodable bytes travel as surrogates so they are re-sent unchanged.
    pairs = [(name, value) for name, values in params.items() for value in values]
    encoded = urlencode(pairs, errors="surrogateescape")
    if decoded:
        return unquote_plus(encoded, errors="surrogateescape")
    return encoded


def _split(url: str) -> SplitResult:
    try:
        return urlsplit(url)
    except ValueError as exc:
        raise QueryParseError(f"unable to parse URL {url!r}: {exc}") from exc


def _url_with_value(parts: SplitResult, params: QueryParams, name: str, value: str, decoded: bool) -> str:
    mutated = {key: list(values) for key, values in params.items()}
    mutated[name][0] = value
    return parts._replace(query=encode_query(mutated, decoded=decoded)).geturl()


def generate_injections(url: str, rule: Rule, *, decoded_params: bool = False) -> list[UrlInjection]:
    """Build every baseline/injected/heuristic triple for ``url`` under ``rule``."""
    parts = _split(url)
    params = parse_query(parts.query)

    for name in rule.extra_params:
        if name not in params:
            params[name] = [""]

    if not params:
        return []

    context = TemplateContext(url=url)
    payloads = [expand(injection, context) for injection in rule.injections]
    heuristic = expand(rule.heuristics.injection, context) if rule.heuristics_enabled else None

    injections: list[UrlInjection] = []
    for payload in payloads:
        for name, values in params.items():
            param_context = context.with_original_value(values[0])
            injected_url = _url_with_value(parts, params, name, expand(payload, param_context), decoded_params)
            heuristics_url = None
            if heuristic is not None:
                heuristics_url = _url_with_value(parts, params, name, expand(heuristic, param_context), decoded_params)
            injections.append(
                UrlInjection(
                    baseline_url=url,
                    injected_url=injected_url,
                    heuristics_url=heuristics_url,
                    parameter=name,
                )
            )
    return injections


__all__ = ["QueryParams", "encode_query", "generate_injections", "parse_query"]
