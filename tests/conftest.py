from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from config.log import configure_logging
from modules.orders.models import OrderItem, new_draft_order
from modules.vouchers.constants import VoucherDiscountType
from modules.vouchers.models import Voucher


@pytest.fixture(scope="session", autouse=True)
def _structured_logging():
    """Route structlog through stdlib logging so ``caplog`` sees every event."""
    configure_logging(level="DEBUG", json=False)


@pytest.fixture()
def customer_id():
    return uuid4()


@pytest.fixture()
def order(customer_id):
    """An empty draft order."""
    return new_draft_order(customer_id)


@pytest.fixture()
def product_id():
    return uuid4()


@pytest.fixture()
def make_item(product_id):
    """Build an OrderItem, defaulting to the shared ``product_id``."""

    def _make(quantity=1, unit_price="100", pid=None, name="Product A"):
        return OrderItem(
            product_id=pid or product_id,
            product_name=name,
            quantity=quantity,
            unit_price=Decimal(unit_price),
        )

    return _make


@pytest.fixture()
def make_voucher():
    """Build a Voucher that is applicable unless overridden."""

    def _make(**overrides):
        defaults = {
            "code": "PROMO-10",
            "discount_type": VoucherDiscountType.PERCENTAGE,
            "discount_percentage": Decimal("10"),
            "expires_at": datetime.now(timezone.utc) + timedelta(days=1),
            "quantity": 1,
        }
        defaults.update(overrides)
        return Voucher(**defaults)

    return _make
