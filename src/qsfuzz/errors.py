# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class QsfuzzError(Exception):
    """Base class for qsfuzz errors."""


class ConfigError(QsfuzzError):
    """Missing or malformed configuration; fatal before any request is sent."""


class QueryParseError(QsfuzzError, ValueError):
    """A URL or its query string could not be parsed; the URL is skipped."""


class NotificationError(QsfuzzError):
    """A notification could not be delivered; never affects run accounting."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorCategory.INVALID_URL

    # httpx wraps the underlying ssl/socket errors; inspect the cause first.
    cause = exc.__cause__ or exc.__context__
    for candidate in (exc, cause):
        if isinstance(candidate, (ssl.SSLError, ssl.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(candidate, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ValueError):
        return ErrorCategory.INVALID_URL

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "ConfigError",
    "ErrorCategory",
    "NotificationError",
    "QsfuzzError",
    "QueryParseError",
    "categorize_exception",
]
