"""Domain value objects."""

from .value_objects import CENTS, ExecutionID, Money, round_money
from .order_number import OrderNumber

__all__ = [
    "CENTS",
    "ExecutionID",
    "Money",
    "OrderNumber",
    "round_money",
]
