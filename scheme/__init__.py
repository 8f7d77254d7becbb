"""Additively homomorphic LWE encryption context consumed by the matching core."""

from scheme.params import SchemeParameters
from scheme.ciphertext import Plaintext, Ciphertext
from scheme.keys import SecretKey, PublicKey, EvaluationKey, KeySet, generate_keys
from scheme.comparison import ComparisonService
from scheme.context import EncryptionContext
