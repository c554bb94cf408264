#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from venuesync.app import import_venues
from venuesync.config import ConfigurationError, configure_logging, get_import_config
from venuesync.domain.errors import StoreError, StoreUnavailableError
from venuesync.domain.model import Provider
from venuesync.domain.ports import ProviderQuery

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="venuesync", description="Import venues and activities from external providers"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("import", help="Run one import over the selected providers")
    run.add_argument(
        "--provider",
        dest="providers",
        action="append",
        choices=[provider.value for provider in Provider],
        help="Provider to import from; repeat for several (default: all)",
    )
    run.add_argument("--location", type=str, help="Free-text location, e.g. 'Miami, FL'")
    run.add_argument("--latitude", type=float, help="Search centre latitude")
    run.add_argument("--longitude", type=float, help="Search centre longitude")
    run.add_argument("--radius", type=int, help="Search radius in metres")
    run.add_argument("--term", type=str, help="Search term passed to every provider")
    run.add_argument(
        "--category",
        dest="categories",
        action="append",
        default=[],
        help="Provider category filter; repeat for several",
    )
    run.add_argument("--state-code", type=str, help="Two-letter state code (default: FL)")
    run.add_argument(
        "--max-items",
        type=int,
        help="Maximum number of items to request from each provider",
    )
    run.add_argument(
        "--timeout",
        type=float,
        help="Per-provider fetch timeout in seconds",
    )
    run.add_argument("--verbose", "-v", action="store_true", help="Log per-item decisions")
    return parser.parse_args(list(argv))


def _build_query(args: argparse.Namespace) -> ProviderQuery:
    if (args.latitude is None) != (args.longitude is None):
        raise ValueError("--latitude and --longitude must be given together")
    if args.radius is not None and args.radius <= 0:
        raise ValueError("Radius must be positive")
    if args.max_items is not None and args.max_items <= 0:
        raise ValueError("Max items must be positive")
    return ProviderQuery(
        location=args.location,
        latitude=args.latitude,
        longitude=args.longitude,
        radius_meters=args.radius,
        term=args.term,
        categories=tuple(args.categories),
        state_code=args.state_code,
        max_items=args.max_items,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
        query = _build_query(parsed_args)
        config = get_import_config()
        if parsed_args.timeout is not None:
            if parsed_args.timeout <= 0:
                raise ValueError("Timeout must be positive")
            config = replace(config, fetch_timeout_seconds=parsed_args.timeout)
    except (ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    providers = [Provider(value) for value in parsed_args.providers or ()] or None

    try:
        summary = import_venues(query, providers=providers, config=config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except StoreUnavailableError as exc:
        if exc.summary is not None:
            print(json.dumps(exc.summary.to_dict(), indent=2))
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except StoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(summary.to_dict(), indent=2))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
