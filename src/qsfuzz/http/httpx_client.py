# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx
from fake_useragent import UserAgent

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import build_request_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper shared by all worker threads."""

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.Client | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        cookies: str | None = None,
    ):
        self.settings = settings or load_http_settings()
        self.extra_headers = dict(headers or {})
        self.cookies = cookies
        self._user_agents = UserAgent() if self.settings.random_user_agent else None
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
            proxy=self.settings.proxy,
            limits=httpx.Limits(max_connections=None, max_keepalive_connections=0),
        )

    def _user_agent(self) -> str:
        if self._user_agents is None:
            return self.settings.user_agent
        return self._user_agents.random

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = build_request_headers(self._user_agent(), self.extra_headers, self.cookies)
        headers.update(request.headers or {})

        try:
            max_body_bytes = self.settings.max_body_bytes
            if max_body_bytes <= 0:
                max_body_bytes = 16 * 1024 * 1024

            timeout = request.timeout if request.timeout is not None else self.settings.timeout

            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
            ) as resp:
                content = bytearray()
                for chunk in resp.iter_bytes():
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        break
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        break
                    content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=httpx.Headers(resp.headers),
                text=text,
                content=bytes(content),
                url=str(resp.url),
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("request to %s failed: %s", request.url, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc),
                error_type=categorize_exception(exc).value,
            )

    def close(self) -> None:
        self._client.close()
