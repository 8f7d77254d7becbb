"""Vector arithmetic over Z_q for the LWE-based encryption context."""

from core import rng


def random_vector(length: int, modulus: int) -> list[int]:
    """Uniformly random vector in Z_q^length."""
    return [rng.randbelow(modulus) for _ in range(length)]


def error_vector(length: int, bound: int) -> list[int]:
    """Small error vector with entries in [-bound, bound]."""
    return [rng.small(bound) for _ in range(length)]


def dot(a: list[int], b: list[int], modulus: int) -> int:
    assert len(a) == len(b)
    total = 0
    for x, y in zip(a, b):
        total += x * y
    return total % modulus


def vec_add(a: list[int], b: list[int], modulus: int) -> list[int]:
    assert len(a) == len(b)
    return [(x + y) % modulus for x, y in zip(a, b)]


def vec_sub(a: list[int], b: list[int], modulus: int) -> list[int]:
    assert len(a) == len(b)
    return [(x - y) % modulus for x, y in zip(a, b)]


def subset_sum(rows: list[list[int]], selector: list[int], modulus: int) -> list[int]:
    """Sum the rows whose selector bit is 1."""
    assert len(rows) == len(selector)
    width = len(rows[0])
    acc = [0] * width
    for row, bit in zip(rows, selector):
        if bit:
            for k in range(width):
                acc[k] += row[k]
    return [x % modulus for x in acc]

