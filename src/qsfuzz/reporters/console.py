# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Coloured terminal output.

Matches go to stdout so they can be piped or saved; status lines go to stderr.
"""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from colorama import Fore, Style, just_fix_windows_console

from ..models.evaluation import RunSummary
from ..scan.report import format_progress, format_summary

just_fix_windows_console()


class ConsoleReporter:
    def __init__(self, silent: bool = False, out: TextIO | None = None, err: TextIO | None = None):
        self.silent = silent
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self._lock = threading.Lock()

    def _write(self, stream: TextIO, text: str) -> None:
        with self._lock:
            stream.write(text + "\n")
            stream.flush()

    def success(self, message: str) -> None:
        self._write(self.out, f"{Fore.GREEN}{message}{Style.RESET_ALL}")

    def error(self, message: str) -> None:
        self._write(self.err, f"{Fore.RED}{message}{Style.RESET_ALL}")

    def info(self, message: str) -> None:
        if not self.silent:
            self._write(self.err, message)

    def progress(self, summary: RunSummary) -> None:
        if not self.silent:
            self._write(self.err, format_progress(summary))

    def summary(self, summary: RunSummary) -> None:
        if not self.silent:
            self._write(self.err, f"{Fore.CYAN}{format_summary(summary)}{Style.RESET_ALL}")
