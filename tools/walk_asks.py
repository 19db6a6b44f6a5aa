#!/usr/bin/env python3
"""Walk every page of an asks listing and check the stream is sane.

Follows continuation tokens until the end of stream and reports duplicate ids
and rows that break the sort order.
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

from orderfeed.api.asks_api import list_asks
from orderfeed.config.loader import load_config, load_sources_config
from orderfeed.database.sqlite_client import session_context
from orderfeed.errors import OrderFeedError
from orderfeed.orders.order_models import AskOrder, FilterRequest
from orderfeed.sources.directory import SourceDirectory


def _in_order(previous: AskOrder, current: AskOrder, sort_by: str) -> bool:
    if sort_by == "price":
        return (previous.price.gross.native_amount, previous.id) < (current.price.gross.native_amount, current.id)
    # createdAt is rendered to the millisecond while the store sorts on the raw
    # epoch, so rows sharing a rendered timestamp may come in any id order
    before, after = previous.created_at, current.created_at
    if before == after:
        return previous.id != current.id
    return before > after


def _order_issues(orders: list[AskOrder], sort_by: str) -> list[str]:
    issues: list[str] = []
    for previous, current in zip(orders, orders[1:]):
        if not _in_order(previous, current, sort_by):
            issues.append(f"{current.id} is out of order after {previous.id}")
    return issues


def walk(request_kwargs: dict, config_path: Path | None, max_pages: int) -> int:
    config = load_config(config_path)
    sources = SourceDirectory.from_config(load_sources_config(Path(config["sources_path"])))
    sort_by = request_kwargs.get("sort_by", "createdAt")

    orders: list[AskOrder] = []
    continuation = None
    pages = 0
    with session_context(config["storage"]["database_url"]) as session:
        while pages < max_pages:
            try:
                page = list_asks(
                    session,
                    FilterRequest(continuation=continuation, **request_kwargs),
                    sources,
                    side=config["asks"]["side"],
                    chain_id=config["chain_id"],
                )
            except OrderFeedError as exc:
                print(f"[orderfeed] {exc.kind}: {exc.message}", file=sys.stderr)
                return 2
            pages += 1
            orders.extend(page.orders)
            continuation = page.continuation
            if continuation is None:
                break

    duplicates = [order_id for order_id, count in Counter(o.id for o in orders).items() if count > 1]
    issues = [f"duplicate id {order_id}" for order_id in duplicates] + _order_issues(orders, sort_by)

    print(f"[orderfeed] pages={pages} orders={len(orders)} complete={continuation is None}")
    for issue in issues:
        print(f"  - {issue}", file=sys.stderr)
    return 1 if issues else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=Path, default=None, help="Path to orderfeed.config.yaml")
    parser.add_argument("--token", type=str)
    parser.add_argument("--maker", type=str)
    parser.add_argument("--contracts", nargs="+")
    parser.add_argument("--sort-by", choices=["createdAt", "price"], default="createdAt")
    parser.add_argument("--limit", type=int, default=100)
    parser.add_argument("--max-pages", type=int, default=1000)
    args = parser.parse_args(argv)

    request_kwargs = {
        "token": args.token,
        "maker": args.maker,
        "contracts": args.contracts,
        "sort_by": args.sort_by,
        "limit": args.limit,
    }
    return walk(request_kwargs, args.config, args.max_pages)


if __name__ == "__main__":
    raise SystemExit(main())
