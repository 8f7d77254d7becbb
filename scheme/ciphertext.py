"""Plaintext and ciphertext values. Both are immutable."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Plaintext:
    """Slot vector of integers mod the plaintext modulus."""
    slots: tuple[int, ...]

    def __getitem__(self, i: int) -> int:
        return self.slots[i]

    def __len__(self):
        return len(self.slots)


@dataclass(frozen=True)
class Ciphertext:
    """Opaque encrypted slot vector: one LWE sample (mask, body) per slot.

    noise_bound is a worst-case bound on the decryption error, tracked
    through homomorphic operations.
    """
    key_id: int
    masks: tuple[tuple[int, ...], ...] = field(repr=False)
    bodies: tuple[int, ...] = field(repr=False)
    noise_bound: int

    @property
    def num_slots(self) -> int:
        return len(self.bodies)

    def __repr__(self):
        return (f"Ciphertext(key={self.key_id:08x}, slots={self.num_slots}, "
                f"noise<={self.noise_bound})")
