# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across qsfuzz."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: dict[str, str] | None = None
    timeout: float | None = None


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable snapshot of one HTTP exchange.

    ``headers`` is an ``httpx.Headers`` instance: multi-valued with case-insensitive
    keys. ``content_length`` is the number of body bytes actually read, which stays
    meaningful for chunked or compressed responses where the Content-Length header
    is absent or describes the encoded size.
    """

    ok: bool
    status_code: int | None = None
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None

    @property
    def content_length(self) -> int:
        return len(self.content)

    @property
    def body(self) -> str:
        return self.text

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HttpResponse:
        """Build a response from a plain mapping (fixtures and stub clients)."""
        raw_headers: Any = data.get("headers") or {}
        headers = httpx.Headers(raw_headers)

        raw_body = data.get("body")
        content: bytes = b""
        text: str = ""
        if isinstance(raw_body, (bytes, bytearray, memoryview)):
            content = bytes(raw_body)
            text = content.decode("utf-8", errors="replace")
        elif isinstance(raw_body, str):
            text = raw_body
            content = raw_body.encode("utf-8")

        return cls(
            ok=bool(data.get("ok", True)),
            status_code=data.get("status_code"),
            headers=headers,
            text=text,
            content=content,
            url=data.get("url"),
            error_message=data.get("error_message"),
            error_type=data.get("error_type"),
        )
