"""CLI entrypoint for the orderfeed asks engine."""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from orderfeed.api.asks_api import list_asks
from orderfeed.config.loader import load_config, load_sources_config
from orderfeed.database.sqlite_client import session_context
from orderfeed.errors import RequestValidationError
from orderfeed.orders.order_models import FilterRequest
from orderfeed.sources.directory import SourceDirectory
from orderfeed.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _load_runtime(args: argparse.Namespace):
    config = load_config(Path(args.config) if args.config else None)
    sources_config = load_sources_config(Path(config["sources_path"]))
    return config, SourceDirectory.from_config(sources_config)


def _build_request(args: argparse.Namespace) -> FilterRequest:
    ids = args.ids
    if ids and len(ids) == 1:
        ids = ids[0]
    return FilterRequest(
        ids=ids,
        token=args.token,
        maker=args.maker,
        contracts=args.contracts,
        status=args.status,
        include_private=args.include_private,
        include_metadata=args.include_metadata,
        include_raw_data=args.include_raw_data,
        sort_by=args.sort_by,
        continuation=args.continuation,
        limit=args.limit,
    )


def cmd_asks(args: argparse.Namespace) -> int:
    """List one page of asks and print the JSON response."""
    config, sources = _load_runtime(args)

    try:
        request = _build_request(args)
    except ValidationError as e:
        print(json.dumps({"error": "InvalidRequest", "message": str(e)}))
        return 2

    try:
        with session_context(config["storage"]["database_url"]) as session:
            page = list_asks(
                session,
                request,
                sources,
                side=config["asks"]["side"],
                chain_id=config["chain_id"],
            )
    except RequestValidationError as e:
        print(json.dumps(e.to_dict()))
        return 2

    body = page.to_response(
        include_metadata=request.include_metadata,
        include_raw_data=request.include_raw_data,
    )
    print(json.dumps(body, indent=2))
    return 0


def cmd_sources_list(args: argparse.Namespace) -> int:
    """List configured attribution sources."""
    try:
        _, sources = _load_runtime(args)
    except FileNotFoundError as e:
        logger.error(f"Config not found: {e}")
        print("Error: config file not found. Create orderfeed.config.yaml and config/sources.yaml")
        return 1

    entries = sources.list_sources()
    if not entries:
        print("No sources configured.")
        return 0

    print(f"{'ID':<6} {'Name':<20} {'Domain':<25} {'Address':<42}")
    print("-" * 95)
    for entry in entries:
        print(f"{entry.id:<6} {entry.name:<20} {entry.domain or '-':<25} {entry.address:<42}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="orderfeed: keyset-paginated asks listing")
    parser.add_argument("--config", type=str, help="Path to orderfeed.config.yaml")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    asks_parser = subparsers.add_parser("asks", help="List asks (listings)")
    asks_parser.add_argument("--ids", nargs="+", help="Order id(s) to search for")
    asks_parser.add_argument("--token", type=str, help="Filter to a token: <contract>:<tokenId>")
    asks_parser.add_argument("--maker", type=str, help="Filter to a maker address")
    asks_parser.add_argument("--contracts", nargs="+", help="Filter to up to 50 contracts")
    asks_parser.add_argument(
        "--status",
        type=str,
        choices=["active", "inactive"],
        help="active or inactive (only with --maker)",
    )
    asks_parser.add_argument("--include-private", action="store_true", help="Include private orders")
    asks_parser.add_argument("--include-metadata", action="store_true", help="Include token/collection metadata")
    asks_parser.add_argument("--include-raw-data", action="store_true", help="Include raw order payload")
    asks_parser.add_argument(
        "--sort-by",
        type=str,
        choices=["createdAt", "price"],
        default="createdAt",
        help="Sort order (price requires --token, default: createdAt)",
    )
    asks_parser.add_argument("--limit", type=int, default=50, help="Page size, at most 100 (default: 50)")
    asks_parser.add_argument("--continuation", type=str, help="Continuation token from a previous page")
    asks_parser.set_defaults(func=cmd_asks)

    sources_parser = subparsers.add_parser("sources", help="Attribution source commands")
    sources_subparsers = sources_parser.add_subparsers(dest="sources_command")
    sources_list_parser = sources_subparsers.add_parser("list", help="List configured sources")
    sources_list_parser.set_defaults(func=cmd_sources_list)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    sys.exit(main())
