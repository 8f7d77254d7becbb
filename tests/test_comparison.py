"""Tests for the encrypted less-than circuit."""

import dataclasses

import pytest

from core import rng
from core.errors import CapabilityError
from scheme.comparison import ComparisonService
from scheme.context import EncryptionContext
from scheme.keys import EvaluationKey
from scheme.lwe import decrypt_values
from tests.utils import SMALL_PARAMS


def compare(a, b, seed=42):
    rng.set_seed(seed)
    context, keys = EncryptionContext.generate(SMALL_PARAMS)
    result = context.less_than(context.encrypt_quantity(a), context.encrypt_quantity(b))
    return context.decrypt(result, keys.secret_key)


def test_less_than_13_lt_20():
    assert compare(13, 20)[0] == 1


def test_less_than_20_not_lt_13():
    assert compare(20, 13)[0] == 0


def test_less_than_equal_is_not_less():
    assert compare(15, 15)[0] == 0


def test_less_than_zero_vs_zero():
    assert compare(0, 0)[0] == 0


def test_less_than_extremes():
    t = SMALL_PARAMS.plaintext_modulus
    assert compare(0, t - 1)[0] == 1
    assert compare(t - 1, 0)[0] == 0


def test_padding_slots_compare_equal():
    # zero padding on both sides: 0 < 0 is false
    assert compare(3, 9).slots == (1, 0)


def test_less_than_on_aggregates():
    rng.set_seed(7)
    context, keys = EncryptionContext.generate(SMALL_PARAMS)
    buy = context.add(context.encrypt_quantity(10), context.encrypt_quantity(20))
    sell = context.encrypt_quantity(15)
    assert context.decode(context.decrypt(context.less_than(sell, buy), keys.secret_key)) == 1
    assert context.decode(context.decrypt(context.less_than(buy, sell), keys.secret_key)) == 0


def test_less_than_after_subtraction():
    rng.set_seed(8)
    context, keys = EncryptionContext.generate(SMALL_PARAMS)
    remaining = context.sub(context.encrypt_quantity(15), context.encrypt_quantity(10))
    order = context.encrypt_quantity(20)
    bit = context.less_than(remaining, order)
    assert context.decode(context.decrypt(bit, keys.secret_key)) == 1


def test_comparison_requires_evaluation_key():
    rng.set_seed(9)
    context, keys = EncryptionContext.generate(SMALL_PARAMS)
    public_only = EncryptionContext(SMALL_PARAMS, keys.public_key)
    a = public_only.encrypt_quantity(1)
    b = public_only.encrypt_quantity(2)
    with pytest.raises(CapabilityError):
        public_only.less_than(a, b)


def test_comparison_counted():
    rng.set_seed(10)
    context, _ = EncryptionContext.generate(SMALL_PARAMS)
    context.less_than(context.encrypt_quantity(1), context.encrypt_quantity(2))
    assert context.metrics.count("compare") == 1


def test_evaluation_key_carries_no_secret():
    rng.set_seed(11)
    context, keys = EncryptionContext.generate(SMALL_PARAMS)
    fields = dataclasses.astuple(keys.evaluation_key)
    assert keys.secret_key.secret not in fields
    assert all(isinstance(value, int) for value in fields)

    ct = context.encrypt_quantity(4242)
    for value in fields:
        vector = (value,) * SMALL_PARAMS.lwe_dimension
        assert decrypt_values(SMALL_PARAMS, vector, ct)[0] != 4242


def test_service_rejects_foreign_evaluation_key():
    rng.set_seed(12)
    context, keys = EncryptionContext.generate(SMALL_PARAMS)
    forged = EvaluationKey(keys.evaluation_key.key_id, keys.evaluation_key.token + 1)
    a = context.encrypt_quantity(1)
    b = context.encrypt_quantity(2)
    with pytest.raises(CapabilityError):
        context.comparison_service.less_than(a, b, forged)
    with pytest.raises(CapabilityError):
        context.comparison_service.less_than(a, b, None)


def test_comparison_requires_service():
    rng.set_seed(13)
    _, keys = EncryptionContext.generate(SMALL_PARAMS)
    no_service = EncryptionContext(SMALL_PARAMS, keys.public_key,
                                   evaluation_key=keys.evaluation_key)
    a = no_service.encrypt_quantity(1)
    b = no_service.encrypt_quantity(2)
    with pytest.raises(CapabilityError):
        no_service.less_than(a, b)


def test_service_built_from_key_set():
    rng.set_seed(14)
    context, keys = EncryptionContext.generate(SMALL_PARAMS)
    service = ComparisonService(SMALL_PARAMS, keys)
    result = service.less_than(context.encrypt_quantity(3), context.encrypt_quantity(5),
                               keys.evaluation_key)
    assert context.decode(context.decrypt(result, keys.secret_key)) == 1
