"""Confidential Order Matching — Entry Point.

Usage: python main.py [order_file] [seed]

Loads an order file ({"pair": ..., "buy_orders": [...], "sell_orders": [...]},
default ./order.json) and matches it. Without an order file, runs the
built-in scenarios.
"""

import asyncio
import logging
import sys
from pathlib import Path

from core import rng
from core.errors import MatchingError
from core.orders import Side, load_order_file
from protocols.greedy_fill import MatchConfig
from protocols.matching import MatchingEngine
from protocols.observer import LoggingObserver
from protocols.oracle import DecryptionOracle
from scheme.context import EncryptionContext
from scheme.params import SchemeParameters


DEFAULT_ORDER_FILE = "order.json"
USAGE = "Usage: python main.py [order_file] [seed]"


def parse_args(args: list[str]) -> tuple[Path, int | None]:
    """Positional order file path and optional integer seed."""
    if len(args) > 2:
        print(USAGE, file=sys.stderr)
        sys.exit(2)
    path = Path(args[0]) if args else Path(DEFAULT_ORDER_FILE)
    seed = None
    if len(args) > 1:
        try:
            seed = int(args[1])
        except ValueError:
            print(f"Invalid seed {args[1]!r}: expected an integer", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            sys.exit(2)
    return path, seed


async def run_match(buy_orders: list[int], sell_orders: list[int],
                    pair: str | None = None, seed: int | None = None,
                    verbose: bool = False):
    """Match one order book and print the report."""
    if seed is not None:
        rng.set_seed(seed)

    print(f"=== Confidential Order Matching{f' ({pair})' if pair else ''} ===")
    print(f"Buy orders:  {len(buy_orders)}")
    print(f"Sell orders: {len(sell_orders)}")
    if seed is not None:
        print(f"Seed: {seed}")
    print()

    params = SchemeParameters()
    context, keys = EncryptionContext.generate(params)
    oracle = DecryptionOracle(context, keys.secret_key)
    observer = LoggingObserver() if verbose else None
    engine = MatchingEngine(context, oracle, MatchConfig(), observer)

    result = await engine.match(buy_orders, sell_orders, pair)

    # Results
    print("--- Results ---")
    if result.scarce_side is Side.SELL:
        print("  Sum of buy orders is greater than or equal to sum of sell orders.")
    else:
        print("  Sum of buy orders is less than sum of sell orders.")
    print(f"  Transaction volume: {result.transaction_volume}")
    print(f"  Addressable volume: {result.addressable_volume}")
    for i, (q, filled) in enumerate(zip(buy_orders, result.buy_fill_vector), 1):
        status = "filled" if filled else "cannot be filled"
        print(f"  Buy order #{i} ({q}): {status}")
    for i, (q, filled) in enumerate(zip(sell_orders, result.sell_fill_vector), 1):
        status = "filled" if filled else "cannot be filled"
        print(f"  Sell order #{i} ({q}): {status}")

    # Metrics
    metrics = context.metrics
    print(f"\n--- Metrics ---")
    print(f"  Comparisons: {engine.oracle.comparisons}")
    print(f"  Bits revealed: {oracle.bits_revealed}")
    print(f"  Amounts revealed: {oracle.amounts_revealed}")
    print(f"  Time: {metrics.elapsed:.3f}s")
    if metrics.by_type:
        print(f"  By operation:")
        for op, count in sorted(metrics.by_type.items()):
            print(f"    {op}: {count}")
    print()

    return result


async def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    args = sys.argv[1:]
    path, seed = parse_args(args)

    if args or path.exists():
        try:
            orders = load_order_file(path)
            await run_match(orders.buy_orders, orders.sell_orders,
                            pair=orders.pair, seed=seed, verbose=True)
        except MatchingError as e:
            print(f"Matching failed: {e}", file=sys.stderr)
            sys.exit(1)
        return

    seed = 42
    print("=" * 50)
    print("SCENARIO 1: Buy side abundant, trimmed")
    print("=" * 50)
    await run_match([10, 20], [15], seed=seed)

    print("=" * 50)
    print("SCENARIO 2: Equal sums (tie fills the sell side)")
    print("=" * 50)
    await run_match([5], [5], seed=seed + 1)

    print("=" * 50)
    print("SCENARIO 3: Unit orders exhaust the remainder")
    print("=" * 50)
    await run_match([1, 1, 1], [2], seed=seed + 2)

    print("=" * 50)
    print("SCENARIO 4: Sell side abundant, trimmed")
    print("=" * 50)
    await run_match([7, 3], [4, 9, 2, 1], seed=seed + 3)


if __name__ == "__main__":
    asyncio.run(main())
