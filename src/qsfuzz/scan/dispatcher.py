# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Bounded concurrent dispatcher.

A single producer (the thread calling ``Dispatcher.run``) expands URL x rule x
injection into ``Task`` objects and feeds them through a bounded queue to a fixed
pool of worker threads. When every worker is busy waiting on slow responses the
producer blocks on ``queue.put`` instead of buffering work.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterable
from typing import Protocol

from ..config import FuzzSettings, load_fuzz_settings
from ..errors import NotificationError, QueryParseError
from ..fuzz.evaluator import evaluate
from ..fuzz.generator import generate_injections
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..models.config import FuzzConfig
from ..models.evaluation import EvaluationResult, RunSummary
from ..models.injection import Task
from .stats import RunStats

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    def success(self, message: str) -> None: ...

    def progress(self, summary: RunSummary) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class BaselineCache:
    """Baseline URL -> response map shared by workers; the first stored response wins."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._responses: dict[str, HttpResponse] = {}

    def get(self, url: str) -> HttpResponse | None:
        with self._lock:
            return self._responses.get(url)

    def put(self, url: str, response: HttpResponse) -> HttpResponse:
        with self._lock:
            return self._responses.setdefault(url, response)

    def __len__(self) -> int:
        with self._lock:
            return len(self._responses)


class Dispatcher:
    """Runs every generated task across a fixed worker pool and aggregates the outcome."""

    def __init__(
        self,
        config: FuzzConfig,
        http_client: HttpClient,
        *,
        settings: FuzzSettings | None = None,
        reporter: Reporter | None = None,
        notifier: Notifier | None = None,
    ):
        self.config = config
        self.http_client = http_client
        self.settings = settings or load_fuzz_settings()
        self.reporter = reporter
        self.notifier = notifier
        self.stats = RunStats()
        self.baseline_cache = BaselineCache()
        self._results: list[EvaluationResult] = []
        self._results_lock = threading.Lock()

    @property
    def results(self) -> list[EvaluationResult]:
        with self._results_lock:
            return list(self._results)

    def iter_tasks(self, urls: Iterable[str]) -> Iterable[Task]:
        """Expand URLs x rules into tasks; unparseable URLs are skipped."""
        for url in urls:
            for rule_name, rule in self.config.rules.items():
                try:
                    injections = generate_injections(url, rule, decoded_params=self.settings.decoded_params)
                except QueryParseError as exc:
                    # Parsing does not depend on the rule, so the URL is skipped once.
                    self.stats.record_skipped()
                    logger.debug("error parsing URL or query parameters for %s: %s", url, exc)
                    break
                for injection in injections:
                    yield Task(injection=injection, rule=rule, rule_name=rule_name)

    def run(self, urls: Iterable[str]) -> RunSummary:
        workers = max(1, self.settings.workers)
        self.stats = RunStats()
        tasks: queue.Queue[Task | None] = queue.Queue(maxsize=self.settings.effective_queue_size)

        threads = [
            threading.Thread(target=self._worker, args=(tasks,), name=f"qsfuzz-worker-{i}", daemon=True)
            for i in range(workers)
        ]
        for thread in threads:
            thread.start()

        try:
            for task in self.iter_tasks(urls):
                tasks.put(task)
        finally:
            for _ in threads:
                tasks.put(None)
            for thread in threads:
                thread.join()

        return self.stats.snapshot()

    def _worker(self, tasks: queue.Queue[Task | None]) -> None:
        while True:
            task = tasks.get()
            try:
                if task is None:
                    return
                self._process(task)
            except Exception:  # noqa: BLE001
                logger.debug("task for %s failed", task.injection.injected_url if task else None, exc_info=True)
                self.stats.record_failure()
            finally:
                tasks.task_done()

    def _process(self, task: Task) -> None:
        injection = task.injection
        baseline_response = None
        heuristics_response = None

        if task.rule.heuristics_enabled and injection.heuristics_url:
            baseline_response = self._baseline(injection.baseline_url)
            if baseline_response is None:
                return
            heuristics_response = self._send(injection.heuristics_url)
            if heuristics_response is None:
                return

        response = self._send(injection.injected_url)
        if response is None:
            return

        evaluation = evaluate(
            response,
            injection,
            task.rule,
            task.rule_name,
            heuristics_response=heuristics_response,
            baseline_response=baseline_response,
        )
        if evaluation.successful:
            self._record_success(task, evaluation.success_message)

    def _baseline(self, url: str) -> HttpResponse | None:
        cached = self.baseline_cache.get(url)
        if cached is not None:
            return cached
        response = self._send(url)
        if response is None:
            return None
        return self.baseline_cache.put(url, response)

    def _send(self, url: str) -> HttpResponse | None:
        response = self.http_client.request(HttpRequest(url=url))
        if not response.ok:
            self.stats.record_failure(response.error_type)
            logger.debug("error sending HTTP request (%s): %s", url, response.error_message)
            return None

        sent = self.stats.record_sent()
        interval = self.settings.progress_interval
        if self.reporter is not None and not self.settings.silent and interval > 0 and sent % interval == 0:
            self.reporter.progress(self.stats.snapshot())
        return response

    def _record_success(self, task: Task, message: str) -> None:
        result = EvaluationResult(
            rule_name=task.rule_name,
            rule_description=task.rule.description,
            injected_url=task.injection.injected_url,
        )
        with self._results_lock:
            self._results.append(result)
        self.stats.record_match()

        if self.reporter is not None:
            self.reporter.success(message)
        if self.notifier is not None:
            try:
                self.notifier.notify(message)
            except NotificationError as exc:
                logger.debug("failed to send notification: %s", exc)
