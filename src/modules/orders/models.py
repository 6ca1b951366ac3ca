"""Order aggregate root and its OrderItem lines.

Business rules implemented:
- An order holds at most one line per product; adding an existing product
  merges the units into that line.
- Each product line carries between ``MIN_UNITS_PER_ITEM`` and
  ``MAX_UNITS_PER_ITEM`` units.  ``add_item`` checks the combined quantity,
  ``update_item`` checks the incoming quantity alone (the line is
  overwritten, not incremented).
- Updating or removing a product the order does not contain is rejected.
- ``total_value`` is always the sum of line values minus the voucher
  discount, clamped at zero.  It is recomputed after every item mutation.
- Only one voucher is active at a time; applying another replaces it.
- Orders are only created through ``new_draft_order``, in ``DRAFT`` status.
- The order keeps its own copy of every line it receives, so a line object
  held by the caller (or by another order) never changes this order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Optional, Tuple
from uuid import UUID

import structlog

from modules.orders.constants import (
    MAX_UNITS_PER_ITEM,
    MIN_UNITS_PER_ITEM,
    OrderStatus,
)
from modules.orders.events import (
    OrderDraftCreated,
    OrderItemAdded,
    OrderItemRemoved,
    OrderItemUpdated,
    VoucherApplied,
)
from modules.orders.exceptions import (
    ItemNotInOrder,
    ItemQuantityBelowMinimum,
    ItemQuantityExceeded,
)
from modules.vouchers.constants import VoucherDiscountType
from shared.domain.entity import Entity
from shared.domain.events import DomainEventMixin
from shared.domain.values import Number, as_decimal

if TYPE_CHECKING:
    from modules.vouchers.models import Voucher
    from shared.domain.validation import ValidationResult

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")

_FACTORY_TOKEN = object()


class OrderItem(Entity):
    """A single product line owned by an Order.

    ``unit_price`` is a snapshot taken when the line is built; it does not
    follow later catalog changes.  All fields are read-only: quantities only
    change through the owning Order.
    """

    def __init__(
        self,
        product_id: UUID,
        product_name: str,
        quantity: int,
        unit_price: Number,
        id: Optional[UUID] = None,
    ) -> None:
        if quantity < MIN_UNITS_PER_ITEM:
            raise ItemQuantityBelowMinimum(
                f"Minimum of {MIN_UNITS_PER_ITEM} unit per product."
            )
        super().__init__(id)
        self._product_id = product_id
        self._product_name = product_name
        self._quantity = quantity
        self._unit_price = as_decimal(unit_price)

    @property
    def product_id(self) -> UUID:
        return self._product_id

    @property
    def product_name(self) -> str:
        return self._product_name

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def unit_price(self) -> Decimal:
        return self._unit_price

    def calculate_value(self) -> Decimal:
        """Return ``unit_price * quantity``."""
        return self._unit_price * self._quantity

    def _add_units(self, units: int) -> None:
        # Only called by Order after the quantity limit has been checked.
        self._quantity += units

    def _copy(self) -> OrderItem:
        return OrderItem(
            self._product_id,
            self._product_name,
            self._quantity,
            self._unit_price,
            id=self.id,
        )

    def __repr__(self) -> str:
        return (
            f"OrderItem(product_id={self._product_id}, quantity={self._quantity}, "
            f"unit_price={self._unit_price})"
        )


class Order(DomainEventMixin, Entity):
    """Order aggregate root.

    All item mutations go through ``add_item``, ``update_item`` and
    ``remove_item``; ``items`` is a read-only snapshot.  Every rule is checked
    before any state changes, so a rejected call leaves the order untouched.

    Not thread-safe: concurrent access must be serialised by the caller.
    """

    def __init__(self, _token: object = None) -> None:
        if _token is not _FACTORY_TOKEN:
            raise TypeError("Orders must be created with new_draft_order().")
        super().__init__()
        self._customer_id: Optional[UUID] = None
        self._items: Dict[UUID, OrderItem] = {}
        self._total_value = ZERO
        self._discount = ZERO
        self._status: Optional[OrderStatus] = None
        self._voucher_applied = False
        self._voucher: Optional[Voucher] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def customer_id(self) -> Optional[UUID]:
        return self._customer_id

    @property
    def items(self) -> Tuple[OrderItem, ...]:
        return tuple(self._items.values())

    @property
    def total_value(self) -> Decimal:
        return self._total_value

    @property
    def discount(self) -> Decimal:
        return self._discount

    @property
    def status(self) -> Optional[OrderStatus]:
        return self._status

    @property
    def voucher_applied(self) -> bool:
        return self._voucher_applied

    @property
    def voucher(self) -> Optional[Voucher]:
        return self._voucher

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def has_item(self, item: OrderItem) -> bool:
        """Return ``True`` if a line for the same product already exists."""
        return item.product_id in self._items

    def add_item(self, item: OrderItem) -> None:
        """Add units of a product, merging into an existing line if present."""
        self._validate_allowed_quantity(item)

        added = item.quantity
        existing = self._items.get(item.product_id)
        if existing is not None:
            existing._add_units(added)
        else:
            self._items[item.product_id] = item._copy()

        self._recalculate_order_value()
        self.add_domain_event(
            OrderItemAdded(
                aggregate_id=self.id,
                product_id=item.product_id,
                quantity=added,
            )
        )
        logger.info(
            "order.item_added",
            order_id=str(self.id),
            product_id=str(item.product_id),
            quantity=added,
            total_value=str(self._total_value),
        )

    def update_item(self, item: OrderItem) -> None:
        """Overwrite the existing line for ``item``'s product."""
        self._validate_item_exists(item)
        # Overwrite semantics: the incoming quantity is checked on its own.
        self._validate_quantity_limit(item.quantity, item.product_id)

        self._items[item.product_id] = item._copy()

        self._recalculate_order_value()
        self.add_domain_event(
            OrderItemUpdated(
                aggregate_id=self.id,
                product_id=item.product_id,
                quantity=item.quantity,
            )
        )
        logger.info(
            "order.item_updated",
            order_id=str(self.id),
            product_id=str(item.product_id),
            quantity=item.quantity,
            total_value=str(self._total_value),
        )

    def remove_item(self, item: OrderItem) -> None:
        """Remove the line for ``item``'s product."""
        self._validate_item_exists(item)

        del self._items[item.product_id]

        self._recalculate_order_value()
        self.add_domain_event(
            OrderItemRemoved(aggregate_id=self.id, product_id=item.product_id)
        )
        logger.info(
            "order.item_removed",
            order_id=str(self.id),
            product_id=str(item.product_id),
            total_value=str(self._total_value),
        )

    # ------------------------------------------------------------------
    # Voucher
    # ------------------------------------------------------------------

    def apply_voucher(self, voucher: Voucher) -> ValidationResult:
        """Apply ``voucher`` if it passes its own applicability check.

        Returns the voucher's ``ValidationResult``.  On failure the order is
        left exactly as it was.  A previously applied voucher is replaced.
        """
        log = logger.bind(order_id=str(self.id), voucher_id=str(voucher.id))

        result = voucher.validate_applicable()
        if not result.is_valid:
            log.warning("order.voucher_rejected", failures=result.messages)
            return result

        # Computed before any assignment so a failure leaves no partial state.
        total, discount = self._discounted(voucher, self._raw_total())

        self._voucher = voucher
        self._voucher_applied = True
        self._total_value = total
        self._discount = discount

        self.add_domain_event(
            VoucherApplied(aggregate_id=self.id, voucher_id=voucher.id)
        )
        log.info(
            "order.voucher_applied",
            discount=str(self._discount),
            total_value=str(self._total_value),
        )
        return result

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    def _raw_total(self) -> Decimal:
        return sum((item.calculate_value() for item in self._items.values()), ZERO)

    def _recalculate_order_value(self) -> None:
        self._total_value = self._raw_total()
        self._recalculate_discount()

    def _recalculate_discount(self) -> None:
        # Expects _total_value to hold the raw item sum.
        if not self._voucher_applied or self._voucher is None:
            return
        self._total_value, self._discount = self._discounted(
            self._voucher, self._total_value
        )

    @staticmethod
    def _discounted(voucher: Voucher, raw_total: Decimal) -> Tuple[Decimal, Decimal]:
        """Return ``(total, discount)`` for ``voucher`` on ``raw_total``."""
        discount = ZERO
        if voucher.discount_type is VoucherDiscountType.VALUE:
            if voucher.discount_value is not None:
                discount = voucher.discount_value
        elif voucher.discount_percentage is not None:
            discount = (raw_total * voucher.discount_percentage) / 100

        value = raw_total - discount
        return (value if value > ZERO else ZERO), discount

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_item_exists(self, item: OrderItem) -> None:
        if not self.has_item(item):
            logger.warning(
                "order.item_not_found",
                order_id=str(self.id),
                product_id=str(item.product_id),
            )
            raise ItemNotInOrder("The item does not belong to the order.")

    def _validate_allowed_quantity(self, item: OrderItem) -> None:
        quantity = item.quantity
        existing = self._items.get(item.product_id)
        if existing is not None:
            quantity += existing.quantity
        self._validate_quantity_limit(quantity, item.product_id)

    def _validate_quantity_limit(self, quantity: int, product_id: UUID) -> None:
        if quantity > MAX_UNITS_PER_ITEM:
            logger.warning(
                "order.item_quantity_exceeded",
                order_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
            )
            raise ItemQuantityExceeded(
                f"Maximum of {MAX_UNITS_PER_ITEM} units per product."
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        status = self._status.value if self._status else "-"
        return f"Order {self.id} ({status}) total={self._total_value}"


def new_draft_order(customer_id: UUID) -> Order:
    """Create an empty order for ``customer_id`` in ``DRAFT`` status."""
    order = Order(_FACTORY_TOKEN)
    order._customer_id = customer_id
    order._status = OrderStatus.DRAFT
    order.add_domain_event(
        OrderDraftCreated(aggregate_id=order.id, customer_id=customer_id)
    )
    logger.info(
        "order.draft_created", order_id=str(order.id), customer_id=str(customer_id)
    )
    return order
