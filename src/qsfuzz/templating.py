# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Payload template expansion.

Payloads in the rule file may reference the target with ``[[token]]`` markers, for
example ``http://attacker.example/?from=[[domain]]``. The set of tokens is closed
(see ``Token``); anything else between double brackets is left untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote_plus, urlsplit

_TOKEN_RE = re.compile(r"\[\[([^\[\]]*)\]\]")


class Token(str, Enum):
    FULLURL = "fullurl"
    DOMAIN = "domain"
    PATH = "path"
    ORIGINALVALUE = "originalvalue"

    @classmethod
    def parse(cls, name: str) -> Token | None:
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class TemplateContext:
    """
    Values available to a template.

    ``original_value`` is only set once the parameter being mutated is known; until
    then ``[[originalvalue]]`` survives expansion so it can be resolved later.
    """

    url: str
    original_value: str | None = None

    def resolve(self, token: Token) -> str | None:
        if token is Token.FULLURL:
            return quote_plus(self.url)
        if token is Token.DOMAIN:
            return urlsplit(self.url).hostname or ""
        if token is Token.PATH:
            return quote_plus(urlsplit(self.url).path)
        if token is Token.ORIGINALVALUE:
            return self.original_value
        return None

    def with_original_value(self, value: str) -> TemplateContext:
        return TemplateContext(url=self.url, original_value=value)


def has_tokens(template: str) -> bool:
    return "[[" in template and "]]" in template


def expand(template: str, context: TemplateContext) -> str:
    """Replace every resolvable ``[[token]]`` in a single pass."""
    if not has_tokens(template):
        return template

    def _replace(match: re.Match[str]) -> str:
        token = Token.parse(match.group(1))
        if token is None:
            return match.group(0)
        value = context.resolve(token)
        return match.group(0) if value is None else value

    return _TOKEN_RE.sub(_replace, template)


__all__ = ["TemplateContext", "Token", "expand", "has_tokens"]
