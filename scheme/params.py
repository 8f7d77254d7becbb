"""Scheme parameters for the LWE encryption context."""

from dataclasses import dataclass


DEFAULT_PLAINTEXT_MODULUS = 65537
DEFAULT_SLOTS = 16


@dataclass(frozen=True)
class SchemeParameters:
    """Parameters of the additively homomorphic LWE scheme.

    plaintext_modulus bounds every quantity and every partial aggregate.
    Each ciphertext carries `slots` independent values; only slot 0 holds a
    quantity, the rest are zero padding.
    """

    plaintext_modulus: int = DEFAULT_PLAINTEXT_MODULUS
    slots: int = DEFAULT_SLOTS
    lwe_dimension: int = 32
    ciphertext_modulus: int = 1 << 62
    public_key_samples: int = 64
    error_bound: int = 4

    def __post_init__(self):
        if self.plaintext_modulus < 2:
            raise ValueError("plaintext_modulus must be at least 2")
        if self.slots < 1:
            raise ValueError("slots must be at least 1")
        if self.lwe_dimension < 1 or self.public_key_samples < 1:
            raise ValueError("lwe_dimension and public_key_samples must be positive")
        if self.error_bound < 0:
            raise ValueError("error_bound must be non-negative")
        if self.max_noise <= self.fresh_noise_bound:
            raise ValueError(
                "ciphertext_modulus too small: fresh ciphertexts would not decrypt")

    @property
    def delta(self) -> int:
        """Scaling factor floor(q / t) applied to plaintext values."""
        return self.ciphertext_modulus // self.plaintext_modulus

    @property
    def wrap_error(self) -> int:
        """Extra error a plaintext wraparound adds, q mod t."""
        return self.ciphertext_modulus % self.plaintext_modulus

    @property
    def fresh_noise_bound(self) -> int:
        """Worst-case noise of a fresh public-key encryption."""
        return self.public_key_samples * self.error_bound + self.error_bound

    @property
    def max_noise(self) -> int:
        """Largest noise that still decrypts correctly."""
        return self.delta // 2 - self.wrap_error - 1
