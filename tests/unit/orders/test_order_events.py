"""Unit tests for domain events recorded by the Order aggregate."""

from __future__ import annotations

import logging
from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from modules.orders.events import (
    OrderDraftCreated,
    OrderItemAdded,
    OrderItemRemoved,
    OrderItemUpdated,
    VoucherApplied,
)
from modules.orders.exceptions import ItemNotInOrder, ItemQuantityExceeded

pytestmark = pytest.mark.unit


def test_new_draft_order_records_creation(order, customer_id):
    (event,) = order.domain_events

    assert isinstance(event, OrderDraftCreated)
    assert event.aggregate_id == order.id
    assert event.customer_id == customer_id
    assert event.event_name == "OrderDraftCreated"


def test_item_operations_record_events(order, make_item, product_id):
    order.clear_domain_events()

    order.add_item(make_item(quantity=2))
    order.update_item(make_item(quantity=4))
    order.remove_item(make_item())

    events = order.domain_events
    assert [type(e) for e in events] == [
        OrderItemAdded,
        OrderItemUpdated,
        OrderItemRemoved,
    ]
    assert all(e.product_id == product_id for e in events)
    assert events[0].quantity == 2
    assert events[1].quantity == 4


def test_adding_same_object_twice_reports_incoming_quantity(order, make_item):
    item = make_item(quantity=2)
    order.add_item(item)
    order.add_item(item)

    added = [e for e in order.domain_events if isinstance(e, OrderItemAdded)]
    assert [e.quantity for e in added] == [2, 2]
    assert order.items[0].quantity == 4


def test_voucher_applied_event(order, make_voucher):
    order.clear_domain_events()
    voucher = make_voucher()

    order.apply_voucher(voucher)

    (event,) = order.domain_events
    assert isinstance(event, VoucherApplied)
    assert event.voucher_id == voucher.id


def test_failed_operations_record_nothing(order, make_item, make_voucher):
    order.clear_domain_events()

    with pytest.raises(ItemQuantityExceeded):
        order.add_item(make_item(quantity=16))
    with pytest.raises(ItemNotInOrder):
        order.remove_item(make_item(pid=uuid4()))
    order.apply_voucher(make_voucher(active=False))

    assert order.domain_events == []


def test_domain_events_returns_a_copy(order):
    order.domain_events.clear()
    assert len(order.domain_events) == 1


def test_events_are_immutable(order):
    (event,) = order.domain_events
    with pytest.raises(FrozenInstanceError):
        event.customer_id = uuid4()  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def test_item_added_is_logged(order, make_item, caplog):
    with caplog.at_level(logging.INFO, logger="modules.orders.models"):
        order.add_item(make_item(quantity=2))

    assert any("order.item_added" in r.getMessage() for r in caplog.records)


def test_quantity_violation_is_logged_as_warning(order, make_item, caplog):
    with caplog.at_level(logging.WARNING, logger="modules.orders.models"):
        with pytest.raises(ItemQuantityExceeded):
            order.add_item(make_item(quantity=20))

    assert any(
        r.levelno == logging.WARNING
        and "order.item_quantity_exceeded" in r.getMessage()
        for r in caplog.records
    )


def test_rejected_voucher_is_logged(order, make_voucher, caplog):
    with caplog.at_level(logging.INFO, logger="modules.orders.models"):
        order.apply_voucher(make_voucher(used=True))

    assert any("order.voucher_rejected" in r.getMessage() for r in caplog.records)
