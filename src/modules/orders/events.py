"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderDraftCreated(DomainEvent):
    """Raised when a draft order is created."""

    customer_id: Optional[UUID] = None


@dataclass(frozen=True)
class OrderItemAdded(DomainEvent):
    """Raised when units of a product are added to an order."""

    product_id: Optional[UUID] = None
    quantity: int = 0


@dataclass(frozen=True)
class OrderItemUpdated(DomainEvent):
    """Raised when an order line is overwritten."""

    product_id: Optional[UUID] = None
    quantity: int = 0


@dataclass(frozen=True)
class OrderItemRemoved(DomainEvent):
    """Raised when an order line is removed."""

    product_id: Optional[UUID] = None


@dataclass(frozen=True)
class VoucherApplied(DomainEvent):
    """Raised when a voucher is successfully applied to an order."""

    voucher_id: Optional[UUID] = None
