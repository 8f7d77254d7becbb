"""Result Assembler: fill decisions and plaintext quantities -> report.

No homomorphic operations happen here. The plaintext quantities are kept
alongside the ciphertexts for reporting only; every decision was made by
the comparison oracle.
"""

from dataclasses import dataclass, field

from core.orders import Order, Side
from protocols.greedy_fill import FillOutcome
from scheme.ciphertext import Ciphertext


@dataclass(frozen=True)
class MatchResult:
    transaction_volume: int
    addressable_volume: int
    buy_fill_vector: list[int]
    sell_fill_vector: list[int]
    scarce_side: Side
    pair: str | None = None
    encrypted_buy_fills: list[Ciphertext] = field(default_factory=list, repr=False)
    encrypted_sell_fills: list[Ciphertext] = field(default_factory=list, repr=False)

    def fill_vector(self, side: Side) -> list[int]:
        return self.buy_fill_vector if side is Side.BUY else self.sell_fill_vector

    def encrypted_fills(self, side: Side) -> list[Ciphertext]:
        return self.encrypted_buy_fills if side is Side.BUY else self.encrypted_sell_fills

    @property
    def buy_filled_volume(self) -> int:
        return sum(self.buy_fill_vector)

    @property
    def sell_filled_volume(self) -> int:
        return sum(self.sell_fill_vector)

    def to_dict(self) -> dict:
        return {
            "pair": self.pair,
            "transaction_volume": self.transaction_volume,
            "addressable_volume": self.addressable_volume,
            "scarce_side": self.scarce_side.value,
            "buy_fill_vector": list(self.buy_fill_vector),
            "sell_fill_vector": list(self.sell_fill_vector),
        }


class ResultAssembler:
    """Shape fill decisions into per-side fill vectors and the volume report."""

    def fill_vector(self, orders: list[Order], decisions: list[bool]) -> list[int]:
        assert len(orders) == len(decisions)
        return [o.quantity if filled else 0 for o, filled in zip(orders, decisions)]

    def assemble(self, outcome: FillOutcome,
                 buy_orders: list[Order], sell_orders: list[Order],
                 transaction_volume: int, addressable_volume: int,
                 pair: str | None = None) -> MatchResult:
        return MatchResult(
            transaction_volume=transaction_volume,
            addressable_volume=addressable_volume,
            buy_fill_vector=self.fill_vector(buy_orders, outcome.decisions[Side.BUY]),
            sell_fill_vector=self.fill_vector(sell_orders, outcome.decisions[Side.SELL]),
            scarce_side=outcome.scarce,
            pair=pair,
            encrypted_buy_fills=list(outcome.encrypted_fills[Side.BUY]),
            encrypted_sell_fills=list(outcome.encrypted_fills[Side.SELL]),
        )
