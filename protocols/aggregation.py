"""Order Aggregator: homomorphic left fold of one side's encrypted orders."""

from core.errors import InputError
from core.orders import Side
from protocols.observer import MatchObserver
from scheme.ciphertext import Ciphertext
from scheme.context import EncryptionContext


class OrderAggregator:
    """Reduce an ordered sequence of encrypted amounts into one encrypted sum."""

    def __init__(self, context: EncryptionContext, observer: MatchObserver | None = None):
        self.context = context
        self.observer = observer or MatchObserver()

    def aggregate(self, orders: list[Ciphertext], side: Side) -> Ciphertext:
        """Fold left to right starting from orders[0].

        There is no encrypted zero to start from, so at least one order is
        required. Intermediate sums go to the observer only.
        """
        if not orders:
            raise InputError(f"Cannot aggregate an empty {side.value} side")

        total = orders[0]
        for i in range(1, len(orders)):
            total = self.context.add(total, orders[i])
            self.observer.on_intermediate_sum(side, i, total)
        return total
