# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fuzzing rule models.

Rules are loaded once from the YAML rule file and shared read-only between all
worker threads, so every model here is a frozen dataclass built through
``from_mapping``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import ConfigError

RESPONSE_CODE = "responsecode"
RESPONSE_LENGTH = "responselength"
RESPONSE_CONTENT = "responsecontent"
RESPONSE_HEADER = "responseheader"

BASELINE_CATEGORIES = frozenset({RESPONSE_CODE, RESPONSE_LENGTH, RESPONSE_CONTENT, RESPONSE_HEADER})


def _string_tuple(value: Any, *, field_name: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, (str, int, float)):
        return (str(value),)
    if isinstance(value, Iterable) and not isinstance(value, Mapping):
        return tuple("" if item is None else str(item) for item in value)
    raise ConfigError(f"{field_name} must be a list")


@dataclass(frozen=True)
class ExpectedResponse:
    """
    Expectation set for an injected response.

    Each field is one expectation category; ``None`` means the category is absent.
    ``codes`` and ``lengths`` keep their raw string form so that a non-numeric entry
    only disables itself at evaluation time.
    """

    contents: tuple[str, ...] | None = None
    codes: tuple[str, ...] | None = None
    headers: Mapping[str, str] | None = None
    lengths: tuple[str, ...] | None = None

    @property
    def categories(self) -> int:
        return sum(1 for value in (self.contents, self.codes, self.headers, self.lengths) if value is not None)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ExpectedResponse:
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("expectation must be a mapping")

        headers = data.get("responseHeaders")
        if headers is not None:
            if not isinstance(headers, Mapping):
                raise ConfigError("responseHeaders must be a mapping of header name to value")
            headers = {str(k): "" if v is None else str(v) for k, v in headers.items()}

        lengths = data.get("responseLengths", data.get("responseLength"))
        return cls(
            contents=_string_tuple(data.get("responseContents"), field_name="responseContents"),
            codes=_string_tuple(data.get("responseCodes"), field_name="responseCodes"),
            headers=headers,
            lengths=_string_tuple(lengths, field_name="responseLengths"),
        )


@dataclass(frozen=True)
class HeuristicsRule:
    """Control mutation plus the categories that must be confirmed against the baseline."""

    injection: str = ""
    baseline_matches: frozenset[str] = frozenset()

    def requires(self, category: str) -> bool:
        return category in self.baseline_matches

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> HeuristicsRule:
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("heuristics must be a mapping")
        matches = _string_tuple(data.get("baselineMatches"), field_name="baselineMatches") or ()
        normalized = frozenset(m.strip().lower() for m in matches if m.strip())
        unknown = normalized - BASELINE_CATEGORIES
        if unknown:
            raise ConfigError(f"unknown baselineMatches categories: {', '.join(sorted(unknown))}")
        injection = data.get("injection")
        return cls(injection="" if injection is None else str(injection), baseline_matches=normalized)


@dataclass(frozen=True)
class Rule:
    description: str = ""
    injections: tuple[str, ...] = ()
    extra_params: tuple[str, ...] = ()
    expectation: ExpectedResponse = field(default_factory=ExpectedResponse)
    heuristics: HeuristicsRule = field(default_factory=HeuristicsRule)

    @property
    def heuristics_enabled(self) -> bool:
        return bool(self.heuristics.injection)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, name: str = "") -> Rule:
        if not isinstance(data, Mapping):
            raise ConfigError(f"rule {name!r} must be a mapping")
        try:
            injections = _string_tuple(data.get("injections"), field_name="injections") or ()
            if not injections:
                raise ConfigError("injections must contain at least one payload")
            extra_params = _string_tuple(data.get("extraParams"), field_name="extraParams") or ()
            return cls(
                description=str(data.get("description") or ""),
                injections=injections,
                extra_params=tuple(p for p in extra_params if p),
                expectation=ExpectedResponse.from_mapping(data.get("expectation")),
                heuristics=HeuristicsRule.from_mapping(data.get("heuristics")),
            )
        except ConfigError as exc:
            raise ConfigError(f"rule {name!r}: {exc}") from exc
