"""Order ingestion: plaintext order lists, validation, and the JSON order file."""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from core.errors import InputError


class Side(Enum):
    BUY = "buy"
    SELL = "sell"

    @property
    def other(self) -> 'Side':
        return Side.SELL if self is Side.BUY else Side.BUY


@dataclass(frozen=True)
class Order:
    """A single order. Identity is its position in the side's list."""
    index: int
    quantity: int


@dataclass(frozen=True)
class OrderFile:
    """Contents of an order file: one trading pair, two order lists."""
    pair: str
    buy_orders: list[int]
    sell_orders: list[int]


def validate_quantities(quantities, modulus: int, side: Side) -> list[Order]:
    """Check one side's plaintext quantities against the plaintext modulus.

    Rejects empty sides, non-integers, negatives, quantities >= modulus and
    sides whose running sum would reach the modulus (every partial aggregate
    must stay below it). Returns the side as positional Orders.
    """
    quantities = list(quantities)
    if not quantities:
        raise InputError(f"{side.value} side has no orders")

    orders = []
    running = 0
    for index, quantity in enumerate(quantities):
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InputError(
                f"{side.value} order #{index} has non-integer quantity {quantity!r}")
        if quantity < 0:
            raise InputError(f"{side.value} order #{index} has negative quantity {quantity}")
        if quantity >= modulus:
            raise InputError(
                f"{side.value} order #{index} quantity {quantity} >= plaintext modulus {modulus}")
        running += quantity
        if running >= modulus:
            raise InputError(
                f"{side.value} aggregate reaches plaintext modulus {modulus} at order #{index}")
        orders.append(Order(index, quantity))
    return orders


def parse_order_file(data: dict) -> OrderFile:
    if not isinstance(data, dict):
        raise InputError("Order file must contain a JSON object")
    missing = [k for k in ("pair", "buy_orders", "sell_orders") if k not in data]
    if missing:
        raise InputError(f"Order file is missing {', '.join(missing)}")
    if not isinstance(data["pair"], str):
        raise InputError("'pair' must be a string")
    for key in ("buy_orders", "sell_orders"):
        if not isinstance(data[key], list):
            raise InputError(f"'{key}' must be a list of quantities")
    return OrderFile(data["pair"], list(data["buy_orders"]), list(data["sell_orders"]))


def load_order_file(path) -> OrderFile:
    """Load an order file. Quantities are range-checked later, at ingestion."""
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise InputError(f"Cannot read order file {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"Order file {path} is not valid JSON: {e}") from e
    return parse_order_file(data)
