# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for qsfuzz."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"qsfuzz/{__version__}"
DEFAULT_WORKERS = 25
DEFAULT_TIMEOUT = 15.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    random_user_agent: bool = True
    allow_redirects: bool = True
    verify_ssl: bool = False
    proxy: str | None = None
    max_body_bytes: int = 16 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("QSFUZZ_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        timeout = _float_env("QSFUZZ_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("QSFUZZ_USER_AGENT", cls.user_agent),
            random_user_agent=_bool_env("QSFUZZ_RANDOM_USER_AGENT", cls.random_user_agent),
            allow_redirects=_bool_env("QSFUZZ_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("QSFUZZ_HTTP_VERIFY_SSL", cls.verify_ssl),
            proxy=os.getenv("QSFUZZ_PROXY") or None,
            max_body_bytes=max_body_bytes,
        )


@dataclass
class FuzzSettings:
    """Dispatcher and output behaviour."""

    workers: int = DEFAULT_WORKERS
    queue_size: int | None = None
    decoded_params: bool = False
    silent: bool = False
    debug: bool = False
    to_slack: bool = False
    progress_interval: int = 1000

    @property
    def effective_queue_size(self) -> int:
        if self.queue_size and self.queue_size > 0:
            return self.queue_size
        return max(1, self.workers) * 2

    @classmethod
    def from_env(cls) -> "FuzzSettings":
        workers = _int_env("QSFUZZ_WORKERS", cls.workers)
        if workers <= 0:
            workers = cls.workers
        queue_size = _int_env("QSFUZZ_QUEUE_SIZE", 0)
        return cls(
            workers=workers,
            queue_size=queue_size if queue_size > 0 else None,
            decoded_params=_bool_env("QSFUZZ_DECODED_PARAMS", cls.decoded_params),
            silent=_bool_env("QSFUZZ_SILENT", cls.silent),
            debug=_bool_env("QSFUZZ_DEBUG", cls.debug),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_fuzz_settings() -> FuzzSettings:
    """Load dispatcher settings from environment with sensible defaults."""
    return FuzzSettings.from_env()
