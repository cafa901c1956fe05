# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient used by tests and offline runs."""

from __future__ import annotations

import threading
from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Responses are looked up by exact URL first, then the optional ``default``
    responder is consulted. Safe to share between worker threads.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        default: Responder | None = None,
    ):
        self._responses = dict(responses or {})
        self._default = default
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
            response = self._responses.get(request.url)
        if response is not None:
            return response
        if self._default is not None:
            return self._default(request)
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    def requested_urls(self) -> list[str]:
        with self._lock:
            return [req.url for req in self.requests]

    def close(self) -> None:
        self.closed = True
