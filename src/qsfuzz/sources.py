# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Candidate URL intake and deduplication."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import parse_qsl, urlsplit


def dedup_key(url: str) -> tuple[str, str, tuple[str, ...]] | None:
    """Return ``(hostname, path, sorted parameter names)`` or None for unusable input."""
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not hostname:
        return None
    names = {name for name, _ in parse_qsl(parts.query, keep_blank_values=True)}
    return hostname, parts.path, tuple(sorted(names))


def read_urls(lines: Iterable[str], *, allow_without_query: bool = False) -> list[str]:
    """
    Keep the first URL for every host/path/parameter-name combination.

    URLs that differ only in parameter values are the same target. URLs without a
    query string are dropped unless ``allow_without_query`` is set (some rule forces
    extra parameters onto every URL).
    """
    seen: set[tuple[str, str, tuple[str, ...]]] = set()
    urls: list[str] = []
    for line in lines:
        url = line.strip()
        if not url:
            continue
        key = dedup_key(url)
        if key is None:
            continue
        if not key[2] and not allow_without_query:
            continue
        if key in seen:
            continue
        seen.add(key)
        urls.append(url)
    return urls


__all__ = ["dedup_key", "read_urls"]
