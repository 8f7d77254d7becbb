"""Key material: secret (decryption), public (encryption), evaluation (comparison)."""

from dataclasses import dataclass, field

from core import rng
from core.lattice import random_vector, error_vector, dot
from scheme.params import SchemeParameters


@dataclass(frozen=True)
class SecretKey:
    key_id: int
    secret: tuple[int, ...] = field(repr=False)


@dataclass(frozen=True)
class PublicKey:
    """LWE samples (rows[i], values[i] = <rows[i], s> + e_i mod q)."""
    key_id: int
    rows: tuple[tuple[int, ...], ...] = field(repr=False)
    values: tuple[int, ...] = field(repr=False)


@dataclass(frozen=True)
class EvaluationKey:
    """Handle that authorizes comparisons on the key owner's ComparisonService.

    Carries only a random token, no lattice material: a party holding the
    public and evaluation keys can request comparisons but cannot decrypt.
    """
    key_id: int
    token: int = field(repr=False)


@dataclass(frozen=True)
class KeySet:
    secret_key: SecretKey
    public_key: PublicKey
    evaluation_key: EvaluationKey


def generate_keys(params: SchemeParameters) -> KeySet:
    """Generate a fresh key set. Deterministic under core.rng.set_seed."""
    q = params.ciphertext_modulus
    key_id = rng.randbelow(1 << 32)
    secret = tuple(random_vector(params.lwe_dimension, q))

    rows = []
    values = []
    errors = error_vector(params.public_key_samples, params.error_bound)
    for e in errors:
        row = random_vector(params.lwe_dimension, q)
        rows.append(tuple(row))
        values.append((dot(row, secret, q) + e) % q)

    return KeySet(
        secret_key=SecretKey(key_id, secret),
        public_key=PublicKey(key_id, tuple(rows), tuple(values)),
        evaluation_key=EvaluationKey(key_id, rng.randbelow(1 << 64)),
    )
