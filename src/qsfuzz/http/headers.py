# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header parsing and request header assembly.

Global headers arrive on the command line as a single semicolon-separated string
(``"X-Api: 1; Authorization:Bearer t"``) and are attached to every outbound request
together with the optional raw Cookie string.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..errors import ConfigError


def parse_header_string(raw: str) -> dict[str, str]:
    """
    Parse ``Name: Value`` / ``Name:Value`` pairs separated by semicolons.

    Segments without a colon are ignored; a string with no colon at all is a
    configuration error.
    """
    if ":" not in raw:
        raise ConfigError("headers flag not formatted properly (no colon to separate header and value)")

    headers: dict[str, str] = {}
    for segment in raw.split(";"):
        if ": " in segment:
            name, _, value = segment.partition(": ")
        elif ":" in segment:
            name, _, value = segment.partition(":")
        else:
            continue
        name = name.strip()
        if not name:
            continue
        headers[name] = value.strip()
    return headers


def build_request_headers(
    user_agent: str,
    extra: Mapping[str, str] | None = None,
    cookies: str | None = None,
) -> dict[str, str]:
    """Assemble the header set sent with every fuzzing request."""
    headers = {"User-Agent": user_agent}
    for name, value in (extra or {}).items():
        headers[str(name)] = "" if value is None else str(value)
    if cookies:
        headers["Cookie"] = cookies
    return headers


__all__ = ["build_request_headers", "parse_header_string"]
