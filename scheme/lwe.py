"""Regev-style public-key LWE encryption with slot-wise homomorphic add/sub."""

from core import rng
from core.lattice import dot, subset_sum, vec_add, vec_sub
from scheme.ciphertext import Ciphertext
from scheme.keys import PublicKey
from scheme.params import SchemeParameters


def encrypt_values(params: SchemeParameters, public_key: PublicKey,
                   values: list[int]) -> Ciphertext:
    """Encrypt one integer per slot under the public key.

    For each slot: pick a random subset r of the public samples, then
    mask = sum r_i * rows_i and body = sum r_i * values_i + delta * v + e.
    """
    assert len(values) == params.slots
    q = params.ciphertext_modulus
    t = params.plaintext_modulus

    masks = []
    bodies = []
    for v in values:
        selector = [rng.randbit() for _ in range(params.public_key_samples)]
        mask = subset_sum(public_key.rows, selector, q)
        body = sum(b for b, bit in zip(public_key.values, selector) if bit)
        body += params.delta * (v % t) + rng.small(params.error_bound)
        masks.append(tuple(mask))
        bodies.append(body % q)

    return Ciphertext(public_key.key_id, tuple(masks), tuple(bodies),
                      params.fresh_noise_bound)


def decrypt_values(params: SchemeParameters, secret: tuple[int, ...],
                   ct: Ciphertext) -> list[int]:
    """Recover every slot: round((body - <mask, s>) / delta) mod t."""
    q = params.ciphertext_modulus
    t = params.plaintext_modulus
    delta = params.delta

    values = []
    for mask, body in zip(ct.masks, ct.bodies):
        phase = (body - dot(mask, secret, q)) % q
        values.append(((phase + delta // 2) // delta) % t)
    return values


def add(params: SchemeParameters, a: Ciphertext, b: Ciphertext) -> Ciphertext:
    q = params.ciphertext_modulus
    masks = tuple(tuple(vec_add(ma, mb, q)) for ma, mb in zip(a.masks, b.masks))
    bodies = tuple((x + y) % q for x, y in zip(a.bodies, b.bodies))
    return Ciphertext(a.key_id, masks, bodies,
                      a.noise_bound + b.noise_bound + params.wrap_error)


def sub(params: SchemeParameters, a: Ciphertext, b: Ciphertext) -> Ciphertext:
    q = params.ciphertext_modulus
    masks = tuple(tuple(vec_sub(ma, mb, q)) for ma, mb in zip(a.masks, b.masks))
    bodies = tuple((x - y) % q for x, y in zip(a.bodies, b.bodies))
    return Ciphertext(a.key_id, masks, bodies,
                      a.noise_bound + b.noise_bound + params.wrap_error)
