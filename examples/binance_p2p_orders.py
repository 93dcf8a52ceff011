#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os
from datetime import UTC, datetime

from p2precon import Credentials, FeeClass, FilterCriteria, OrderFeed, OrderStatus, SearchCriteria
from p2precon.connectors.binance import BinanceP2PConnector
from p2precon.connectors.binance.config import RELAY_URL
from p2precon.core import TradeDirection


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch Binance P2P order history via REST")
    p.add_argument("--side", choices=["BUY", "SELL"], default=None)
    p.add_argument("--days", type=int, default=None, help="Only orders from the last N days")
    p.add_argument("--rows", type=int, default=50)
    p.add_argument("--pages", type=int, default=1, help="Maximum pages to load")
    p.add_argument("--status", choices=[s.value for s in OrderStatus], default=None)
    p.add_argument("--fee-class", choices=[f.value for f in FeeClass], default=None)
    p.add_argument("--no-relay", action="store_true", help="Call the API directly")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    credentials = Credentials(
        api_key=os.environ["BINANCE_API_KEY"],
        secret_key=os.environ["BINANCE_SECRET_KEY"],
    )
    start_time = None
    if args.days:
        start_time = int((datetime.now(UTC).timestamp() - args.days * 86400) * 1000)
    criteria = SearchCriteria(
        start_time=start_time,
        direction=TradeDirection(args.side) if args.side else None,
    )

    connector = BinanceP2PConnector(relay_url=None if args.no_relay else RELAY_URL)
    async with OrderFeed(connector, rows_per_page=args.rows) as feed:
        await feed.connect(credentials, criteria)
        while feed.state.current_page < args.pages and await feed.load_more():
            pass

        check = connector.last_skew_check
        if check is not None:
            print(f"Clock check: {check.outcome.value} (drift {check.drift_ms} ms)")

        visible = feed.orders(
            FilterCriteria(
                status=OrderStatus(args.status) if args.status else None,
                fee_class=FeeClass(args.fee_class) if args.fee_class else None,
            )
        )
        print(f"P2P orders: showing {len(visible)} of {len(feed.state.orders)}:")
        print(
            f"{'Order':>8} | {'Side':>4} | {'Fiat':>12} | {'Price':>8} | {'Crypto':>10} | "
            f"{'Fee':>6} | {'Net':>10} | {'Status':>9}"
        )
        print("-" * 90)
        for o in visible:
            print(
                f"{'...' + o.order_id[-5:]:>8} | {o.direction.value:>4} | {o.fiat_amount:>12.2f} | "
                f"{o.unit_price:>8.2f} | {o.gross_crypto_amount:>10.2f} | {o.fee_amount:>6.2f} | "
                f"{o.net_crypto_amount:>10.2f} | {o.status.value:>9}"
            )

        dropped = sum(len(r) for r in feed.state.rejected.values())
        if dropped:
            print(f"{dropped} record(s) dropped during normalization")
        summary = feed.summary()
        for label, side in (("BUY", summary.buy), ("SELL", summary.sell)):
            if side.count:
                print(
                    f"{label}: {side.count} orders, fiat {side.fiat_total:.2f}, "
                    f"net {side.net_crypto_total:.2f}, avg price {side.average_price}"
                )


if __name__ == "__main__":
    asyncio.run(main())
