"""Order DTOs for callers outside the aggregate.

Framework-agnostic read models using Pydantic v2.  DTOs are immutable
(``frozen=True``) snapshots: building one never mutates the Order.

- ``OrderItemOutputDTO``: output for a single line item.
- ``VoucherOutputDTO``: output for the applied voucher.
- ``OrderOutputDTO``: output with items, totals and voucher.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from modules.orders.constants import OrderStatus
from modules.vouchers.constants import VoucherDiscountType

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem
    from modules.vouchers.models import Voucher


class OrderItemOutputDTO(BaseModel):
    """Immutable DTO for a single order line."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    product_id: UUID
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    @classmethod
    def from_entity(cls, item: OrderItem) -> OrderItemOutputDTO:
        return cls(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.calculate_value(),
        )


class VoucherOutputDTO(BaseModel):
    """Immutable DTO for the voucher applied to an order."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    discount_type: VoucherDiscountType
    discount_value: Optional[Decimal] = None
    discount_percentage: Optional[Decimal] = None

    @classmethod
    def from_entity(cls, voucher: Voucher) -> VoucherOutputDTO:
        return cls(
            id=voucher.id,
            discount_type=voucher.discount_type,
            discount_value=voucher.discount_value,
            discount_percentage=voucher.discount_percentage,
        )


class OrderOutputDTO(BaseModel):
    """Immutable DTO for an order snapshot."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    customer_id: UUID
    status: OrderStatus
    total_value: Decimal
    discount: Decimal
    voucher_applied: bool
    voucher: Optional[VoucherOutputDTO] = None
    items: List[OrderItemOutputDTO]

    @classmethod
    def from_entity(cls, order: Order) -> OrderOutputDTO:
        """Build an output DTO from an Order aggregate."""
        voucher = (
            VoucherOutputDTO.from_entity(order.voucher) if order.voucher else None
        )
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            status=order.status,
            total_value=order.total_value,
            discount=order.discount,
            voucher_applied=order.voucher_applied,
            voucher=voucher,
            items=[OrderItemOutputDTO.from_entity(item) for item in order.items],
        )
