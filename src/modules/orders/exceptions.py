"""Order domain exceptions.

Raised by the Order aggregate when business rules are violated.
The calling layer catches these and translates them into
user-facing errors; the aggregate never suppresses them.
"""

from __future__ import annotations

from shared.domain.exceptions import DomainException


class ItemNotInOrder(DomainException):
    """An update or removal targeted a product the order does not contain."""


class ItemQuantityExceeded(DomainException):
    """The projected quantity for a product exceeds ``MAX_UNITS_PER_ITEM``."""


class ItemQuantityBelowMinimum(DomainException):
    """An order item was built with fewer than ``MIN_UNITS_PER_ITEM`` units."""
