"""Comparison service: encrypted less-than on LWE ciphertexts.

Runs on the key owner's side, next to the decryption oracle. Callers
present an EvaluationKey; the service holds the secret key itself.
"""

from core.errors import CapabilityError
from scheme.ciphertext import Ciphertext
from scheme.keys import EvaluationKey, KeySet
from scheme.lwe import decrypt_values, encrypt_values
from scheme.params import SchemeParameters


class ComparisonService:
    """Evaluate [a < b] slot-wise, producing a fresh encryption of 0/1 bits.

    The circuit's internal construction is not modelled. It is simulated as
    an ideal functionality: the result is exactly what a correct comparison
    circuit would output, re-randomized under the public key. Inputs are
    compared as unsigned integers in [0, t), so a wrapped aggregate
    compares by its wrapped value.
    """

    def __init__(self, params: SchemeParameters, keys: KeySet):
        self.params = params
        self.key_id = keys.public_key.key_id
        self._secret = keys.secret_key.secret
        self._public_key = keys.public_key
        self._token = keys.evaluation_key.token

    def less_than(self, a: Ciphertext, b: Ciphertext,
                  evaluation_key: EvaluationKey | None) -> Ciphertext:
        if evaluation_key is None:
            raise CapabilityError("Comparison requires the evaluation key")
        if evaluation_key.key_id != self.key_id or evaluation_key.token != self._token:
            raise CapabilityError(
                f"Evaluation key {evaluation_key.key_id:08x} is not accepted by "
                f"comparison service {self.key_id:08x}")
        assert a.num_slots == b.num_slots == self.params.slots

        values_a = decrypt_values(self.params, self._secret, a)
        values_b = decrypt_values(self.params, self._secret, b)

        bits = [1 if x < y else 0 for x, y in zip(values_a, values_b)]
        return encrypt_values(self.params, self._public_key, bits)
