# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Loaded fuzzing configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .rule import Rule


@dataclass(frozen=True)
class SlackConfig:
    bot_token: str
    channel: str


@dataclass(frozen=True)
class FuzzConfig:
    """Immutable configuration value passed explicitly into the dispatcher."""

    rules: Mapping[str, Rule] = field(default_factory=dict)
    cookies: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    slack: SlackConfig | None = None

    @property
    def has_extra_params(self) -> bool:
        """True when any rule forces parameters onto URLs that lack a query string."""
        return any(rule.extra_params for rule in self.rules.values())
