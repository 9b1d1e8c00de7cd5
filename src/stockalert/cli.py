#!/usr/bin/env python3
"""Command-line interface for historic quotes, end-of-day ticks and search.

Results are written to stdout as JSON. Failures are written as a
``{"status": 400, "message": ...}`` envelope with exit code 1.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

BAD_REQUEST = 400


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _print_error(error: Exception) -> int:
    _print_json({"status": BAD_REQUEST, "message": str(error)})
    return 1


def _setup(args: argparse.Namespace):
    """Load configuration and configure package logging."""
    from stockalert.commands.config import load_config
    from stockalert.logger import setup_logger

    config = load_config(args.config)
    setup_logger(
        "stockalert",
        level=args.log_level or config.log_level,
        log_file=config.log_file,
    )
    return config


def cmd_quotes(args: argparse.Namespace) -> int:
    """Fetch the historic quotes table of a symbol."""
    from stockalert.commands.quotes import build_quotes_request
    from stockalert.data.aggregator import aggregate_quotes
    from stockalert.data.fetcher import HttpDocumentFetcher
    from stockalert.exceptions import StockAlertError
    from stockalert.types import dump_models

    try:
        config = _setup(args)
        request = build_quotes_request(
            args.symbol,
            start_date=args.start_date,
            duration=args.duration,
            period=args.period,
            defaults=config.quotes,
        )
        fetcher = HttpDocumentFetcher(
            timeout=config.source.timeout, headers=config.source.headers
        )
        quotes = aggregate_quotes(
            request,
            fetcher=fetcher,
            base_url=config.source.base_url,
            max_workers=config.source.max_workers,
        )
    except StockAlertError as e:
        return _print_error(e)

    _print_json(dump_models(quotes))
    return 0


def cmd_ticks(args: argparse.Namespace) -> int:
    """Fetch the end-of-day ticks of a symbol."""
    from stockalert.data.fetcher import HttpDocumentFetcher
    from stockalert.data.ticks import fetch_eod_ticks
    from stockalert.exceptions import StockAlertError

    try:
        config = _setup(args)
        fetcher = HttpDocumentFetcher(
            timeout=config.source.timeout, headers=config.source.headers
        )
        ticks = fetch_eod_ticks(
            args.symbol,
            days=args.days or config.ticks.days,
            fetcher=fetcher,
            base_url=config.source.ticks_base_url,
            strict=args.strict or config.ticks.strict,
        )
    except StockAlertError as e:
        return _print_error(e)

    _print_json(ticks.model_dump(mode="json", by_alias=True))
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """Search instruments by keyword."""
    from stockalert.data.fetcher import HttpDocumentFetcher
    from stockalert.data.search import search_assets
    from stockalert.exceptions import StockAlertError
    from stockalert.types import dump_models

    try:
        config = _setup(args)
        fetcher = HttpDocumentFetcher(
            timeout=config.source.timeout, headers=config.source.headers
        )
        assets = search_assets(
            args.query, fetcher=fetcher, base_url=config.source.base_url
        )
    except StockAlertError as e:
        return _print_error(e)

    _print_json(dump_models(assets))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Historic quotes and tick data from boursorama.com",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config", default=None, help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: from config, else INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Quotes command
    quotes_parser = subparsers.add_parser(
        "quotes", help="Fetch the historic quotes table of a symbol"
    )
    quotes_parser.add_argument("symbol", help="Instrument symbol (e.g., 1rPAF)")
    quotes_parser.add_argument(
        "--start-date",
        default=None,
        help="Start date (DD/MM/YYYY or YYYY-MM-DD, default: one month ago)",
    )
    quotes_parser.add_argument(
        "-d", "--duration", default=None, help="History duration (default: 3M)"
    )
    quotes_parser.add_argument(
        "-p", "--period", default=None, help="Sampling period in days (default: 1)"
    )

    # Ticks command
    ticks_parser = subparsers.add_parser(
        "ticks", help="Fetch end-of-day ticks of a symbol"
    )
    ticks_parser.add_argument("symbol", help="Instrument symbol")
    ticks_parser.add_argument(
        "--days", default=None, help="Number of days of ticks (default: 1)"
    )
    ticks_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on undecodable tick dates instead of keeping them",
    )

    # Search command
    search_parser = subparsers.add_parser("search", help="Search instruments")
    search_parser.add_argument("query", help="Name, symbol or ISIN to look for")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "quotes":
        return cmd_quotes(args)
    elif args.command == "ticks":
        return cmd_ticks(args)
    elif args.command == "search":
        return cmd_search(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
