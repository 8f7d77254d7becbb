"""Test utilities: reference oracle, engine setup, scripted decryption oracles."""

from core import rng
from protocols.greedy_fill import MatchConfig
from protocols.matching import MatchingEngine
from protocols.oracle import DecryptionOracle
from scheme.context import EncryptionContext
from scheme.params import SchemeParameters


# Fewer slots and a smaller LWE instance keep the suite fast
SMALL_PARAMS = SchemeParameters(slots=2, lwe_dimension=16, public_key_samples=32)


def reference_match(buy, sell):
    """Cleartext oracle: greedy inclusive fill, ties fill the sell side.

    Returns (transaction_volume, addressable_volume, buy_fill, sell_fill).
    """
    buy_sum, sell_sum = sum(buy), sum(sell)
    if buy_sum < sell_sum:
        scarce, abundant, remaining = buy, sell, buy_sum
    else:
        scarce, abundant, remaining = sell, buy, sell_sum

    trimmed = []
    for q in abundant:
        if q <= remaining:
            trimmed.append(q)
            remaining -= q
        else:
            trimmed.append(0)

    if buy_sum < sell_sum:
        return buy_sum, sell_sum, list(scarce), trimmed
    return sell_sum, buy_sum, trimmed, list(scarce)


def setup_engine(seed=42, params=SMALL_PARAMS, config=None, observer=None):
    """Seeded key set + decryption oracle + engine. Returns all four."""
    rng.set_seed(seed)
    context, keys = EncryptionContext.generate(params)
    oracle = DecryptionOracle(context, keys.secret_key)
    engine = MatchingEngine(context, oracle, config or MatchConfig(), observer)
    return context, keys, oracle, engine


class ScriptedDecryptionOracle:
    """Wraps a real decryption oracle; reveals `value` on bit reveal #anomaly_at."""

    def __init__(self, inner, anomaly_at, value=7):
        self.inner = inner
        self.anomaly_at = anomaly_at
        self.value = value
        self.calls = 0

    async def reveal_bit(self, ct):
        self.calls += 1
        bit = await self.inner.reveal_bit(ct)
        if self.calls == self.anomaly_at:
            return self.value
        return bit

    async def reveal_amount(self, ct):
        return await self.inner.reveal_amount(ct)
