"""Deterministic PRNG for reproducible key generation and encryption.

Use set_seed(n) at test start for reproducibility.
Default (no seed) uses os.urandom for cryptographic randomness.
"""

import os
import random as _random


class DeterministicRNG:
    """Seeded PRNG wrapper. When seed is None, uses os.urandom."""

    def __init__(self, seed=None):
        self._seed = seed
        if seed is not None:
            self._rng = _random.Random(seed)
        else:
            self._rng = None  # Use os-level randomness

    def randbelow(self, n: int) -> int:
        if self._rng is not None:
            return self._rng.randrange(n)
        # 16 spare bytes keep the modulo bias negligible for n < 2^64
        return int.from_bytes(os.urandom(24), 'big') % n

    def randbit(self) -> int:
        return self.randbelow(2)

    def small(self, bound: int) -> int:
        """Uniform integer in [-bound, bound]."""
        return self.randbelow(2 * bound + 1) - bound


# Global instance
_global_rng = DeterministicRNG(seed=None)


def set_seed(seed: int | None):
    """Set global seed for reproducibility. None = cryptographic randomness."""
    global _global_rng
    _global_rng = DeterministicRNG(seed=seed)


def randbelow(n: int) -> int:
    return _global_rng.randbelow(n)


def randbit() -> int:
    return _global_rng.randbit()


def small(bound: int) -> int:
    return _global_rng.small(bound)
