# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level qsfuzz facade wiring transport, notifier, reporter and dispatcher."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import suppress

from .config import FuzzSettings, HttpSettings, load_fuzz_settings, load_http_settings
from .http.client import HttpClient, create_default_http_client
from .models.config import FuzzConfig
from .models.evaluation import EvaluationResult, RunSummary
from .notify.slack import SlackNotifier
from .scan.dispatcher import Dispatcher, Reporter
from .sources import read_urls


class QsFuzz:
    """
    Convenience wrapper that owns the shared HTTP client for one fuzzing run.

    The rule configuration is passed in explicitly; nothing here reads global state.
    """

    def __init__(
        self,
        config: FuzzConfig,
        *,
        http_settings: HttpSettings | None = None,
        fuzz_settings: FuzzSettings | None = None,
        http_client: HttpClient | None = None,
        reporter: Reporter | None = None,
        notifier: SlackNotifier | None = None,
    ):
        self.config = config
        self.http_settings = http_settings or load_http_settings()
        self.fuzz_settings = fuzz_settings or load_fuzz_settings()
        self.http_client = http_client or create_default_http_client(
            self.http_settings,
            headers=config.headers,
            cookies=config.cookies,
        )
        if notifier is None and self.fuzz_settings.to_slack and config.slack is not None:
            notifier = SlackNotifier(config.slack, timeout=self.http_settings.timeout)
        self.notifier = notifier
        self.dispatcher = Dispatcher(
            config,
            self.http_client,
            settings=self.fuzz_settings,
            reporter=reporter,
            notifier=notifier,
        )

    def candidate_urls(self, lines: Iterable[str]) -> list[str]:
        return read_urls(lines, allow_without_query=self.config.has_extra_params)

    def run(self, urls: Iterable[str]) -> RunSummary:
        return self.dispatcher.run(urls)

    @property
    def results(self) -> list[EvaluationResult]:
        return self.dispatcher.results

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()
        if self.notifier is not None:
            with suppress(Exception):
                self.notifier.close()

    def __enter__(self) -> QsFuzz:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
