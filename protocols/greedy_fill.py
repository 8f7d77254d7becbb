"""Greedy Fill Engine: comparison-conditioned single fill pass.

State machine AGGREGATE -> SELECT_DIRECTION -> FILL_PASS -> DONE:
1. Aggregate each side into an encrypted sum.
2. One encrypted comparison of the sums picks the scarce side, which is
   filled in full, and the abundant side, which is trimmed.
3. The abundant side's orders are walked in insertion order against a
   remainder initialised to the scarce side's sum. An order that fits is
   filled and subtracted from the remainder; one that does not is left
   unfilled and the remainder is unchanged. Decisions are final.
Any failure aborts the run; no partial outcome is returned.
"""

from dataclasses import dataclass
from enum import Enum

from core.orders import Side
from protocols.aggregation import OrderAggregator
from protocols.observer import MatchObserver
from protocols.oracle import ComparisonOracle
from scheme.ciphertext import Ciphertext
from scheme.context import EncryptionContext


class TieBreak(Enum):
    """Which side is treated as abundant when both sums are equal."""
    BUY_ABUNDANT = "buy_abundant"    # [buy < sell]; ties fill the sell side in full
    SELL_ABUNDANT = "sell_abundant"  # [sell < buy]; ties fill the buy side in full


class FitRule(Enum):
    """When an order fits the remaining liquidity."""
    INCLUSIVE = "inclusive"  # quantity <= remaining, as NOT [remaining < quantity]
    STRICT = "strict"        # quantity < remaining, as [quantity < remaining]


class MatchState(Enum):
    AGGREGATE = "aggregate"
    SELECT_DIRECTION = "select_direction"
    FILL_PASS = "fill_pass"
    DONE = "done"


@dataclass(frozen=True)
class MatchConfig:
    tie_break: TieBreak = TieBreak.BUY_ABUNDANT
    fit_rule: FitRule = FitRule.INCLUSIVE


@dataclass
class EncryptedOrderBook:
    """Both sides' encrypted order amounts, in insertion (priority) order."""
    buy: list[Ciphertext]
    sell: list[Ciphertext]

    def side(self, side: Side) -> list[Ciphertext]:
        return self.buy if side is Side.BUY else self.sell


@dataclass
class FillPassResult:
    side: Side
    decisions: list[bool]
    encrypted_fills: list[Ciphertext]
    remaining: Ciphertext


@dataclass
class FillOutcome:
    """Everything the fill engine decided, still encrypted except the bits."""
    scarce: Side
    sums: dict[Side, Ciphertext]
    decisions: dict[Side, list[bool]]
    encrypted_fills: dict[Side, list[Ciphertext]]
    remaining: Ciphertext

    @property
    def abundant(self) -> Side:
        return self.scarce.other


class GreedyFillEngine:
    """Walk the abundant side's orders against the scarce side's liquidity."""

    def __init__(self, context: EncryptionContext, oracle: ComparisonOracle,
                 config: MatchConfig | None = None,
                 observer: MatchObserver | None = None):
        self.context = context
        self.oracle = oracle
        self.config = config or MatchConfig()
        self.observer = observer or MatchObserver()
        self.aggregator = OrderAggregator(context, self.observer)
        self.state = MatchState.AGGREGATE

    async def run(self, book: EncryptedOrderBook) -> FillOutcome:
        # Step 1: per-side encrypted sums
        self.state = MatchState.AGGREGATE
        sums = {
            Side.BUY: self.aggregator.aggregate(book.buy, Side.BUY),
            Side.SELL: self.aggregator.aggregate(book.sell, Side.SELL),
        }

        # Step 2: one comparison decides which side is scarce
        self.state = MatchState.SELECT_DIRECTION
        scarce = await self.select_direction(sums[Side.BUY], sums[Side.SELL])
        abundant = scarce.other

        # Step 3: trim the abundant side against the scarce side's sum
        self.state = MatchState.FILL_PASS
        trimmed = await self.fill_pass(abundant, book.side(abundant), sums[scarce])

        self.state = MatchState.DONE
        return FillOutcome(
            scarce=scarce,
            sums=sums,
            decisions={
                scarce: [True] * len(book.side(scarce)),
                abundant: trimmed.decisions,
            },
            encrypted_fills={
                scarce: list(book.side(scarce)),
                abundant: trimmed.encrypted_fills,
            },
            remaining=trimmed.remaining,
        )

    async def select_direction(self, buy_sum: Ciphertext, sell_sum: Ciphertext) -> Side:
        """Return the scarce side. Exactly one comparison is evaluated."""
        if self.config.tie_break is TieBreak.BUY_ABUNDANT:
            encrypted, buy_less = await self.oracle.evaluate(buy_sum, sell_sum, "direction")
            scarce = Side.BUY if buy_less else Side.SELL
        else:
            encrypted, sell_less = await self.oracle.evaluate(sell_sum, buy_sum, "direction")
            scarce = Side.SELL if sell_less else Side.BUY
        self.observer.on_direction(scarce, encrypted)
        return scarce

    async def fill_pass(self, side: Side, orders: list[Ciphertext],
                        initial: Ciphertext) -> FillPassResult:
        """Greedy first-come-first-served pass over one side.

        The remainder is rebound to a fresh ciphertext on every fill and
        never grows; a rejected order leaves it untouched.
        """
        remaining = initial
        decisions = []
        encrypted_fills = []

        for index, order in enumerate(orders):
            fits = await self._fits(order, remaining, f"fill_{side.value}_{index}")
            if fits:
                remaining = self.context.sub(remaining, order)
                encrypted_fills.append(order)
            else:
                encrypted_fills.append(self.context.encrypt_quantity(0))
            decisions.append(fits)

            self.observer.on_fill_decision(side, index, fits)
            self.observer.on_remainder(side, index, remaining)

        return FillPassResult(side, decisions, encrypted_fills, remaining)

    async def _fits(self, order: Ciphertext, remaining: Ciphertext, session_id: str) -> bool:
        if self.config.fit_rule is FitRule.INCLUSIVE:
            return not await self.oracle.less_than(remaining, order, session_id)
        return await self.oracle.less_than(order, remaining, session_id)
