"""Comparison Oracle and the Decryption Oracle it reveals bits through.

The matching engine holds the public key and the evaluation key, an opaque
handle that authorizes comparisons on the key owner's ComparisonService.
The secret key stays on the owner's side, in the DecryptionOracle and the
ComparisonService. The engine calls the DecryptionOracle to learn the
single bit of each comparison and, at the end, the two reported volumes.
Whoever runs the DecryptionOracle learns exactly the values it is asked
to reveal.
"""

import asyncio
import logging

from core.errors import CapabilityError, OracleAnomaly
from scheme.ciphertext import Ciphertext
from scheme.context import EncryptionContext
from scheme.keys import SecretKey

logger = logging.getLogger(__name__)


class DecryptionOracle:
    """Key-owner side decryption. Reveals slot 0 of a ciphertext.

    Key use is serialized with a lock: concurrent runs sharing one oracle
    never interleave decryptions.
    """

    def __init__(self, context: EncryptionContext, secret_key: SecretKey | None):
        if secret_key is None:
            raise CapabilityError("Decryption oracle requires the secret key")
        if secret_key.key_id != context.key_id:
            raise CapabilityError(
                f"Secret key {secret_key.key_id:08x} does not match context "
                f"{context.key_id:08x}")
        self.context = context
        self._secret_key = secret_key
        self._lock = asyncio.Lock()
        self.bits_revealed = 0
        self.amounts_revealed = 0

    async def reveal_bit(self, ct: Ciphertext) -> int:
        """Decrypt a comparison outcome. The value is returned unchecked."""
        async with self._lock:
            self.bits_revealed += 1
            return self._reveal(ct)

    async def reveal_amount(self, ct: Ciphertext) -> int:
        async with self._lock:
            self.amounts_revealed += 1
            return self._reveal(ct)

    def _reveal(self, ct: Ciphertext) -> int:
        return self.context.decode(self.context.decrypt(ct, self._secret_key))


class ComparisonOracle:
    """Encrypted less-than with a revealed boolean outcome."""

    def __init__(self, context: EncryptionContext, decryption_oracle: DecryptionOracle):
        if context.evaluation_key is None:
            raise CapabilityError("Comparison oracle requires an evaluation key")
        self.context = context
        self.decryption_oracle = decryption_oracle
        self.comparisons = 0

    async def evaluate(self, a: Ciphertext, b: Ciphertext,
                       session_id: str = "") -> tuple[Ciphertext, bool]:
        """Run the circuit for [a < b] and reveal its bit.

        Returns (encrypted outcome, outcome). A revealed value other than 0
        or 1 raises OracleAnomaly; it is never coerced.
        """
        encrypted = self.context.less_than(a, b)
        value = await self.decryption_oracle.reveal_bit(encrypted)
        self.comparisons += 1
        if value not in (0, 1):
            logger.error("Oracle anomaly in %s: revealed %d", session_id or "comparison", value)
            raise OracleAnomaly(value, session_id)
        return encrypted, value == 1

    async def less_than(self, a: Ciphertext, b: Ciphertext, session_id: str = "") -> bool:
        _, outcome = await self.evaluate(a, b, session_id)
        return outcome
