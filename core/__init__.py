"""Core primitives: deterministic RNG, Z_q vector arithmetic, errors, metrics, orders."""

from core import rng
from core.errors import MatchingError, InputError, OracleAnomaly, CapabilityError
from core.metrics import OperationMetrics
from core.orders import Side, Order, OrderFile, validate_quantities, load_order_file
