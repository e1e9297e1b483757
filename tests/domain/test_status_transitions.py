"""Exhaustive check of every operation from every status.

Nothing may leave ``paid`` or ``cancelled``; the only forward moves are
pending -> placed -> paid and pending -> cancelled.
"""

import pytest

from chatorder.domain.exceptions import InvalidStateError
from chatorder.domain.model.menu import MenuEntry
from chatorder.domain.model.order import Order, OrderStatus
from chatorder.domain.model.value_objects import Money

ITEM = MenuEntry(code=10, name="Jollof Rice", price=Money(2500))


def _order_in(status: OrderStatus) -> Order:
    order = Order.open("sid-1")
    order.add_item(ITEM)
    if status == OrderStatus.CANCELLED:
        order.cancel()
    elif status in (OrderStatus.PLACED, OrderStatus.PAID):
        order.place("REF-1")
        if status == OrderStatus.PAID:
            order.mark_paid()
    assert order.status == status
    return order


OPERATIONS = {
    "add_item": lambda o: o.add_item(ITEM),
    "cancel": lambda o: o.cancel(),
    "place": lambda o: o.place("REF-2"),
    "mark_paid": lambda o: o.mark_paid(),
}

# (status, operation) -> resulting status, or None when the call must raise.
EXPECTED = {
    (OrderStatus.PENDING, "add_item"): OrderStatus.PENDING,
    (OrderStatus.PENDING, "cancel"): OrderStatus.CANCELLED,
    (OrderStatus.PENDING, "place"): OrderStatus.PLACED,
    (OrderStatus.PENDING, "mark_paid"): None,
    (OrderStatus.PLACED, "add_item"): None,
    (OrderStatus.PLACED, "cancel"): None,
    (OrderStatus.PLACED, "place"): OrderStatus.PLACED,
    (OrderStatus.PLACED, "mark_paid"): OrderStatus.PAID,
    (OrderStatus.PAID, "add_item"): None,
    (OrderStatus.PAID, "cancel"): None,
    (OrderStatus.PAID, "place"): OrderStatus.PAID,
    (OrderStatus.PAID, "mark_paid"): OrderStatus.PAID,
    (OrderStatus.CANCELLED, "add_item"): None,
    (OrderStatus.CANCELLED, "cancel"): None,
    (OrderStatus.CANCELLED, "place"): None,
    (OrderStatus.CANCELLED, "mark_paid"): None,
}


@pytest.mark.parametrize(("status", "operation"), sorted(EXPECTED, key=lambda k: (k[0].value, k[1])))
def test_transition(status, operation):
    order = _order_in(status)
    reference_before = order.reference
    expected = EXPECTED[(status, operation)]

    if expected is None:
        with pytest.raises(InvalidStateError):
            OPERATIONS[operation](order)
        assert order.status == status
    else:
        OPERATIONS[operation](order)
        assert order.status == expected

    if reference_before is not None:
        assert order.reference == reference_before


@pytest.mark.parametrize("terminal", [OrderStatus.PAID, OrderStatus.CANCELLED])
def test_terminal_statuses_never_change(terminal):
    order = _order_in(terminal)
    for operation in OPERATIONS.values():
        try:
            operation(order)
        except InvalidStateError:
            pass
        assert order.status == terminal
