"""Confidential order matching for one trading pair.

MatchingEngine holds the encryption context (public key, evaluation key
handle and comparison service reference) and talks to a DecryptionOracle for every revealed value. match_orders()
wires a fresh key set, an oracle and an engine together for one run.
"""

import asyncio
import logging

from core.orders import Order, Side, validate_quantities
from protocols.greedy_fill import EncryptedOrderBook, GreedyFillEngine, MatchConfig
from protocols.observer import MatchObserver
from protocols.oracle import ComparisonOracle, DecryptionOracle
from protocols.result import MatchResult, ResultAssembler
from scheme.ciphertext import Ciphertext
from scheme.context import EncryptionContext
from scheme.params import SchemeParameters

logger = logging.getLogger(__name__)


class MatchingEngine:
    """Runs the matching protocol without ever holding the secret key."""

    def __init__(self, context: EncryptionContext, decryption_oracle: DecryptionOracle,
                 config: MatchConfig | None = None,
                 observer: MatchObserver | None = None):
        self.context = context
        self.decryption_oracle = decryption_oracle
        self.config = config or MatchConfig()
        self.observer = observer or MatchObserver()
        self.oracle = ComparisonOracle(context, decryption_oracle)
        self.assembler = ResultAssembler()

    def ingest(self, orders: list[Order], side: Side) -> list[Ciphertext]:
        """Encode and encrypt one validated side, preserving order."""
        encrypted = []
        for order in orders:
            ct = self.context.encrypt_quantity(order.quantity)
            self.observer.on_order_encrypted(side, order.index, ct)
            encrypted.append(ct)
        return encrypted

    async def match(self, buy_quantities, sell_quantities,
                    pair: str | None = None) -> MatchResult:
        t = self.context.params.plaintext_modulus
        # Both sides are validated before anything is encrypted
        buy_orders = validate_quantities(buy_quantities, t, Side.BUY)
        sell_orders = validate_quantities(sell_quantities, t, Side.SELL)

        metrics = self.context.metrics
        metrics.start()
        logger.info("Matching %s: %d buy orders, %d sell orders",
                    pair or "orders", len(buy_orders), len(sell_orders))

        try:
            book = EncryptedOrderBook(
                buy=self.ingest(buy_orders, Side.BUY),
                sell=self.ingest(sell_orders, Side.SELL),
            )

            engine = GreedyFillEngine(self.context, self.oracle, self.config, self.observer)
            outcome = await engine.run(book)

            transaction_volume = await self.decryption_oracle.reveal_amount(
                outcome.sums[outcome.scarce])
            addressable_volume = await self.decryption_oracle.reveal_amount(
                outcome.sums[outcome.abundant])

            result = self.assembler.assemble(
                outcome, buy_orders, sell_orders,
                transaction_volume, addressable_volume, pair)
        finally:
            metrics.stop()

        logger.info("Matched %s: transaction volume %d, %s side fully filled, "
                    "%d comparisons in %.3fs",
                    pair or "orders", transaction_volume, outcome.scarce.value,
                    self.oracle.comparisons, metrics.elapsed)
        return result


async def match_orders_async(buy_quantities, sell_quantities,
                             params: SchemeParameters | None = None,
                             config: MatchConfig | None = None,
                             observer: MatchObserver | None = None,
                             pair: str | None = None) -> MatchResult:
    """Generate keys, then match the two order lists confidentially."""
    params = params or SchemeParameters()
    buy_quantities = list(buy_quantities)
    sell_quantities = list(sell_quantities)
    # Reject bad input before key generation as well as before encryption
    validate_quantities(buy_quantities, params.plaintext_modulus, Side.BUY)
    validate_quantities(sell_quantities, params.plaintext_modulus, Side.SELL)

    context, keys = EncryptionContext.generate(params)
    oracle = DecryptionOracle(context, keys.secret_key)
    engine = MatchingEngine(context, oracle, config, observer)
    return await engine.match(buy_quantities, sell_quantities, pair)


def match_orders(buy_quantities, sell_quantities,
                 params: SchemeParameters | None = None,
                 config: MatchConfig | None = None,
                 observer: MatchObserver | None = None,
                 pair: str | None = None) -> MatchResult:
    """Synchronous entry point. Must not be called from a running event loop."""
    return asyncio.run(match_orders_async(
        buy_quantities, sell_quantities, params, config, observer, pair))
