# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""qsfuzz CLI. Candidate URLs are read from stdin, one per line."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from dataclasses import replace

from ..config import DEFAULT_TIMEOUT, DEFAULT_WORKERS, load_fuzz_settings, load_http_settings
from ..errors import ConfigError
from ..http.headers import parse_header_string
from ..loader import load_config
from ..log import setup_logging
from ..models.config import FuzzConfig
from ..reporters.console import ConsoleReporter
from ..runtime import QsFuzz
from ..scan.report import export_results
from ..version import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qsfuzz",
        description="Inject rule-defined payloads into URL query strings, one parameter at a time",
    )
    parser.add_argument("-c", "--config", help="File path to config file, which contains fuzz rules")
    parser.add_argument("--cookies", help="Cookies to add in all requests")
    parser.add_argument(
        "-H",
        "--headers",
        help="Headers to add in all requests. Multiple should be separated by semi-colon",
    )
    parser.add_argument("--proxy", help="Proxy URL, for example http://127.0.0.1:8080")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug/verbose mode to print more info for failed/malformed URLs or requests",
    )
    parser.add_argument(
        "-s",
        "--silent",
        action="store_true",
        help="Only print successful evaluations (status updates go to stderr)",
    )
    parser.add_argument(
        "-d",
        "--decode",
        action="store_true",
        help="Send requests with decoded query strings/parameters (this could cause many errors/bad requests)",
    )
    parser.add_argument("-w", "--workers", type=int, default=None, help=f"Worker count (default {DEFAULT_WORKERS})")
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=None,
        help=f"Timeout in seconds for each HTTP request (default {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "-ts",
        "--to-slack",
        action="store_true",
        help="Send positive matches to Slack (requires the slack section in the config file)",
    )
    parser.add_argument(
        "-nr",
        "--no-redirects",
        action="store_true",
        help="Do not follow redirects for HTTP requests",
    )
    parser.add_argument("-o", "--output", help="Write confirmed matches to this file as JSON")
    parser.add_argument("--version", action="store_true", help="Print the qsfuzz version and exit")
    return parser


def _apply_flags(config: FuzzConfig, args: argparse.Namespace) -> FuzzConfig:
    headers = dict(config.headers)
    if args.headers:
        headers.update(parse_header_string(args.headers))
    cookies = args.cookies or config.cookies
    return replace(config, headers=headers, cookies=cookies)


def main(argv: list[str] | None = None, stdin: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    fuzz_settings = load_fuzz_settings()
    fuzz_settings.debug = fuzz_settings.debug or args.debug
    setup_logging("DEBUG" if fuzz_settings.debug else None)

    if args.version:
        print(f"qsfuzz version: {__version__}")
        return 0

    reporter = ConsoleReporter(silent=args.silent)
    try:
        if not args.config:
            raise ConfigError("config file flag is required")
        config = _apply_flags(load_config(args.config, require_slack=args.to_slack), args)
    except ConfigError as exc:
        reporter.error(f"Failed loading config: {exc}")
        parser.print_usage(sys.stderr)
        return 1

    http_settings = load_http_settings()
    if args.timeout is not None and args.timeout > 0:
        http_settings.timeout = args.timeout
    if args.no_redirects:
        http_settings.allow_redirects = False
    if args.proxy:
        http_settings.proxy = args.proxy

    if args.workers is not None and args.workers > 0:
        fuzz_settings.workers = args.workers
    fuzz_settings.decoded_params = fuzz_settings.decoded_params or args.decode
    fuzz_settings.silent = fuzz_settings.silent or args.silent
    fuzz_settings.to_slack = args.to_slack
    reporter.silent = fuzz_settings.silent

    with QsFuzz(config, http_settings=http_settings, fuzz_settings=fuzz_settings, reporter=reporter) as fuzzer:
        urls = fuzzer.candidate_urls(sys.stdin if stdin is None else stdin)
        reporter.info(
            f"There are {len(urls)} unique URL/Query String combinations. "
            "Time to inject each query string, 1 at a time!"
        )
        summary = fuzzer.run(urls)
        reporter.summary(summary)
        if args.output:
            written = export_results(fuzzer.results, args.output)
            reporter.info(f"Saved {written} results to {args.output}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
