# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Rule file loading.

Example::

    slack:
      bottoken: xoxb-...
      channel: fuzz-alerts
    rules:
      SQLi:
        description: Error based SQL injection
        injections: ["'", "\\""]
        expectation:
          responseContents: ["SQL syntax"]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .models.config import FuzzConfig, SlackConfig
from .models.rule import Rule

logger = logging.getLogger(__name__)


def _load_slack(raw: Any, *, require: bool, source: str) -> SlackConfig | None:
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"slack section in {source} must be a mapping")
    values = {str(k).lower(): "" if v is None else str(v) for k, v in raw.items()}

    if len(values) < 2 or not values.get("bottoken") or not values.get("channel"):
        if require:
            raise ConfigError(f"Slack flag enabled, but Slack config not adequately provided in {source}")
        return None

    channel = values["channel"]
    if not channel.startswith("#"):
        channel = "#" + channel
    return SlackConfig(bot_token=values["bottoken"], channel=channel)


def parse_config(data: Any, *, require_slack: bool = False, source: str = "<config>") -> FuzzConfig:
    if not isinstance(data, Mapping):
        raise ConfigError(f"{source} must contain a mapping at the top level")

    raw_rules = data.get("rules")
    if not isinstance(raw_rules, Mapping) or not raw_rules:
        raise ConfigError(f"no rules defined in {source}")

    rules = {str(name): Rule.from_mapping(rule, name=str(name)) for name, rule in raw_rules.items()}
    for name, rule in rules.items():
        if rule.heuristics.baseline_matches and not rule.heuristics_enabled:
            logger.warning("rule %r lists baselineMatches without a heuristics injection; those categories cannot match", name)

    headers = data.get("headers") or {}
    if not isinstance(headers, Mapping):
        raise ConfigError(f"headers in {source} must be a mapping")
    cookies = data.get("cookies")

    return FuzzConfig(
        rules=rules,
        cookies=str(cookies) if cookies else None,
        headers={str(k): "" if v is None else str(v) for k, v in headers.items()},
        slack=_load_slack(data.get("slack"), require=require_slack, source=source),
    )


def load_config(path: str | Path, *, require_slack: bool = False) -> FuzzConfig:
    """Read and validate a YAML rule file."""
    source = str(path)
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"unable to read config file {source}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {source}: {exc}") from exc
    return parse_config(data, require_slack=require_slack, source=source)


__all__ = ["load_config", "parse_config"]
