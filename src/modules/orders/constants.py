"""Order domain constants.

Defines the order status choices and the per-product quantity bounds
enforced by the Order aggregate.
"""

from enum import Enum


class OrderStatus(str, Enum):
    DRAFT = "DRAFT"
    STARTED = "STARTED"
    PAID = "PAID"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


MIN_UNITS_PER_ITEM = 1
MAX_UNITS_PER_ITEM = 15
