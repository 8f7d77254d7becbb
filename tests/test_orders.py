"""Tests for order validation and the JSON order file."""

import json

import pytest

from core.errors import InputError
from core.orders import Order, Side, load_order_file, parse_order_file, validate_quantities


T = 65537


def test_validate_positional_orders():
    orders = validate_quantities([10, 20], T, Side.BUY)
    assert orders == [Order(0, 10), Order(1, 20)]


def test_validate_accepts_generator():
    orders = validate_quantities((q for q in [1, 2, 3]), T, Side.SELL)
    assert [o.quantity for o in orders] == [1, 2, 3]


def test_empty_side_rejected():
    with pytest.raises(InputError):
        validate_quantities([], T, Side.BUY)


def test_quantity_at_modulus_rejected():
    with pytest.raises(InputError):
        validate_quantities([T], T, Side.SELL)


def test_quantity_above_modulus_rejected():
    with pytest.raises(InputError):
        validate_quantities([5, T + 10], T, Side.BUY)


def test_aggregate_reaching_modulus_rejected():
    with pytest.raises(InputError):
        validate_quantities([T - 1, 1], T, Side.BUY)


def test_aggregate_just_below_modulus_accepted():
    orders = validate_quantities([T - 2, 1], T, Side.BUY)
    assert len(orders) == 2


def test_negative_rejected():
    with pytest.raises(InputError):
        validate_quantities([3, -1], T, Side.SELL)


def test_non_integer_rejected():
    with pytest.raises(InputError):
        validate_quantities([1.5], T, Side.BUY)
    with pytest.raises(InputError):
        validate_quantities([True], T, Side.BUY)


def test_input_error_is_value_error():
    with pytest.raises(ValueError):
        validate_quantities([], T, Side.BUY)


def test_side_other():
    assert Side.BUY.other is Side.SELL
    assert Side.SELL.other is Side.BUY


def test_load_order_file(tmp_path):
    path = tmp_path / "order.json"
    path.write_text(json.dumps({
        "pair": "ETH/USDC", "buy_orders": [10, 20], "sell_orders": [15]}))
    orders = load_order_file(path)
    assert orders.pair == "ETH/USDC"
    assert orders.buy_orders == [10, 20]
    assert orders.sell_orders == [15]


def test_load_missing_file(tmp_path):
    with pytest.raises(InputError):
        load_order_file(tmp_path / "absent.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "order.json"
    path.write_text("{not json")
    with pytest.raises(InputError):
        load_order_file(path)


def test_parse_missing_keys():
    with pytest.raises(InputError):
        parse_order_file({"pair": "X", "buy_orders": [1]})


def test_parse_wrong_types():
    with pytest.raises(InputError):
        parse_order_file({"pair": 1, "buy_orders": [1], "sell_orders": [1]})
    with pytest.raises(InputError):
        parse_order_file({"pair": "X", "buy_orders": 5, "sell_orders": [1]})
    with pytest.raises(InputError):
        parse_order_file([1, 2])
