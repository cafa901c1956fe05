# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import build_request_headers, parse_header_string
from .httpx_client import HttpxClient
from .models import HttpRequest, HttpResponse

__all__ = [
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "build_request_headers",
    "create_default_http_client",
    "parse_header_string",
]
