"""Encryption context: the capability interface the matching core consumes.

Holds scheme parameters, the public (encryption) key and optionally the
evaluation key together with a handle on the key owner's comparison
service. It never holds the secret key; decrypt() takes the secret
key as an explicit argument so only its owner can call it meaningfully.
"""

import logging

from core.errors import CapabilityError
from core.metrics import OperationMetrics
from scheme import lwe
from scheme.ciphertext import Ciphertext, Plaintext
from scheme.comparison import ComparisonService
from scheme.keys import EvaluationKey, KeySet, PublicKey, SecretKey, generate_keys
from scheme.params import SchemeParameters

logger = logging.getLogger(__name__)


class EncryptionContext:
    """Encode/encrypt/decrypt/decode plus homomorphic add, sub and less-than."""

    def __init__(self, params: SchemeParameters, public_key: PublicKey | None,
                 evaluation_key: EvaluationKey | None = None,
                 comparison_service: ComparisonService | None = None,
                 metrics: OperationMetrics | None = None):
        if public_key is None:
            raise CapabilityError("Encryption context requires a public key")
        if evaluation_key is not None and evaluation_key.key_id != public_key.key_id:
            raise CapabilityError(
                f"Evaluation key {evaluation_key.key_id:08x} does not belong to "
                f"public key {public_key.key_id:08x}")
        self.params = params
        self.public_key = public_key
        self.evaluation_key = evaluation_key
        self.comparison_service = comparison_service
        self.metrics = metrics or OperationMetrics()

    @classmethod
    def generate(cls, params: SchemeParameters | None = None,
                 metrics: OperationMetrics | None = None) -> tuple['EncryptionContext', KeySet]:
        """Generate a key set and a context bound to its public/evaluation keys.

        The comparison service is built on the key owner's side from the full
        key set; the context only sees the service, never the secret key.
        """
        params = params or SchemeParameters()
        keys = generate_keys(params)
        logger.debug("Generated key set %08x (n=%d, t=%d, slots=%d)",
                     keys.public_key.key_id, params.lwe_dimension,
                     params.plaintext_modulus, params.slots)
        service = ComparisonService(params, keys)
        context = cls(params, keys.public_key, evaluation_key=keys.evaluation_key,
                      comparison_service=service, metrics=metrics)
        return context, keys

    @property
    def key_id(self) -> int:
        return self.public_key.key_id

    # --- Encoding ---

    def encode(self, quantity: int) -> Plaintext:
        """Place quantity in slot 0; remaining slots are zero padding."""
        t = self.params.plaintext_modulus
        if not 0 <= quantity < t:
            raise ValueError(f"Quantity {quantity} outside [0, {t})")
        return Plaintext((quantity,) + (0,) * (self.params.slots - 1))

    def decode(self, plaintext: Plaintext) -> int:
        return plaintext[0]

    # --- Encryption ---

    def encrypt(self, plaintext: Plaintext) -> Ciphertext:
        assert len(plaintext) == self.params.slots
        self.metrics.record("encrypt")
        return lwe.encrypt_values(self.params, self.public_key, list(plaintext.slots))

    def encrypt_quantity(self, quantity: int) -> Ciphertext:
        return self.encrypt(self.encode(quantity))

    def decrypt(self, ct: Ciphertext, secret_key: SecretKey | None) -> Plaintext:
        if secret_key is None:
            raise CapabilityError("Decryption requires the secret key")
        if secret_key.key_id != ct.key_id:
            raise CapabilityError(
                f"Secret key {secret_key.key_id:08x} cannot decrypt a ciphertext "
                f"under key {ct.key_id:08x}")
        self.metrics.record("decrypt")
        return Plaintext(tuple(lwe.decrypt_values(self.params, secret_key.secret, ct)))

    # --- Homomorphic operations ---

    def add(self, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        self._check_operands(a, b)
        self.metrics.record("add")
        return lwe.add(self.params, a, b)

    def sub(self, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        self._check_operands(a, b)
        self.metrics.record("sub")
        return lwe.sub(self.params, a, b)

    def less_than(self, a: Ciphertext, b: Ciphertext) -> Ciphertext:
        """Encrypted [a < b] per slot, evaluated under the evaluation key."""
        if self.evaluation_key is None:
            raise CapabilityError("Comparison requires the evaluation key")
        if self.comparison_service is None:
            raise CapabilityError("Comparison requires a comparison service")
        self._check_operands(a, b)
        self.metrics.record("compare")
        return self.comparison_service.less_than(a, b, self.evaluation_key)

    def noise_budget(self, ct: Ciphertext) -> int:
        """Bits of noise headroom left before decryption becomes unreliable."""
        if ct.noise_bound >= self.params.max_noise:
            return 0
        return (self.params.max_noise // max(ct.noise_bound, 1)).bit_length() - 1

    def _check_operands(self, a: Ciphertext, b: Ciphertext):
        for ct in (a, b):
            if ct.key_id != self.key_id:
                raise CapabilityError(
                    f"Ciphertext under key {ct.key_id:08x} used with context "
                    f"{self.key_id:08x}")
        assert a.num_slots == b.num_slots == self.params.slots
