"""Command-line entry point serving the Infoblox provider data sources."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from infoblox_provider import __version__, logger
from infoblox_provider.exceptions import (
    ConfigurationError,
    DataSourceReadError,
    InvalidUrlScheme,
    RequestConnectError,
    SchemaError,
)
from infoblox_provider.provider import Provider

PROVIDER_ERRORS = (ConfigurationError, DataSourceReadError, InvalidUrlScheme, RequestConnectError, SchemaError)


def _parse_filter(value: str) -> tuple:
    """Split a ``key=value`` filter argument."""
    key, sep, filter_value = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Filters must look like key=value, got {value!r}")
    return key, filter_value


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the CLI."""
    parser = argparse.ArgumentParser(prog="infoblox-provider", description="Read Infoblox data sources.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("data-sources", help="List the available data sources.")

    read = subparsers.add_parser("read", help="Read a data source and print its state as JSON.")
    read.add_argument("data_source", help="Data source name, e.g. infoblox_ipv4_network.")
    read.add_argument(
        "--filter",
        dest="filters",
        action="append",
        type=_parse_filter,
        default=[],
        metavar="KEY=VALUE",
        help="WAPI search field; may be repeated.",
    )
    read.add_argument("--server", help="Infoblox server (env INFOBLOX_SERVER).")
    read.add_argument("--username", help="Infoblox user (env INFOBLOX_USERNAME).")
    read.add_argument("--password", help="Infoblox password (env INFOBLOX_PASSWORD).")
    read.add_argument("--wapi-version", help="WAPI version (env WAPI_VERSION).")
    read.add_argument("--port", help="WAPI port (env PORT).")
    read.add_argument("--connect-timeout", type=int, help="Request timeout in seconds (env CONNECT_TIMEOUT).")
    read.add_argument(
        "--no-verify-ssl",
        dest="sslmode",
        action="store_const",
        const=False,
        default=None,
        help="Skip certificate verification.",
    )
    read.add_argument("--verify-ssl", dest="sslmode", action="store_const", const=True, help="Verify certificates.")
    read.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def _provider_config(args: argparse.Namespace) -> Dict[str, object]:
    return {
        "server": args.server,
        "username": args.username,
        "password": args.password,
        "wapi_version": args.wapi_version,
        "port": args.port,
        "sslmode": args.sslmode,
        "connect_timeout": args.connect_timeout,
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "debug", False) else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    provider = Provider(debug=getattr(args, "debug", False))
    if args.command == "data-sources":
        for name in sorted(provider.data_sources_map):
            print(name)
        return 0

    try:
        provider.configure(_provider_config(args))
        state = provider.read_data_source(args.data_source, {"filters": dict(args.filters)})
    except PROVIDER_ERRORS as err:
        logger.error("%s", err)
        return 1

    json.dump(state, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
