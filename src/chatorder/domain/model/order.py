"""Order aggregate — the core of the domain.

An Order is one visitor's cart and, once placed, the record that gets
reconciled against the payment gateway.  All status transitions are
enforced here:

    pending -> placed -> paid
    pending -> cancelled

Nothing leaves ``paid`` or ``cancelled``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from chatorder.domain.exceptions import InvalidStateError, InvalidTransitionError
from chatorder.domain.model.menu import MenuEntry
from chatorder.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PLACED = "placed"
    PAID = "paid"
    CANCELLED = "cancelled"


HISTORY_STATUSES = frozenset(
    {OrderStatus.PLACED, OrderStatus.PAID, OrderStatus.CANCELLED}
)
PAYABLE_STATUSES = frozenset({OrderStatus.PLACED, OrderStatus.PENDING})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderLine:
    """One distinct menu item in an order.

    ``unit_price`` is captured the first time the item is added and is
    kept for every later increment of the same line.
    """

    menu_code: int
    name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for a session's order.

    Use ``Order.open()`` for a new cart.  The ``__init__`` is kept plain so
    the repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    session_key: str
    lines: list[OrderLine] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    reference: str | None = None
    paid_at: datetime | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def open(session_key: str) -> Order:
        """Start an empty pending order for a session."""
        return Order(id=None, session_key=session_key)

    # --- Cart mutation --------------------------------------------------------

    def add_item(self, entry: MenuEntry) -> None:
        """Add one unit of *entry*, merging into an existing line."""
        self._require(OrderStatus.PENDING, "add items to")

        line = self._find_line(entry.code)
        if line is not None:
            line.quantity = line.quantity.increment()
        else:
            self.lines.append(
                OrderLine(
                    menu_code=entry.code,
                    name=entry.name,
                    quantity=Quantity(1),
                    unit_price=entry.price,
                )
            )
        self._touch()

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition pending -> cancelled."""
        self._require(OrderStatus.PENDING, "cancel")
        self.status = OrderStatus.CANCELLED
        self._touch()

    def place(self, reference: str) -> bool:
        """Transition pending -> placed, assigning *reference* if none is set.

        Placing an order that is already placed or paid changes nothing and
        returns False; the existing reference is kept.
        """
        if self.status in (OrderStatus.PLACED, OrderStatus.PAID):
            return False
        self._require(OrderStatus.PENDING, "place")
        if self.is_empty:
            raise InvalidStateError("Cannot place an order with no items")

        self.status = OrderStatus.PLACED
        if self.reference is None:
            self.reference = reference
        self._touch()
        return True

    def mark_paid(self, at: datetime | None = None) -> bool:
        """Transition placed -> paid.  Returns False if already paid."""
        if self.status == OrderStatus.PAID:
            return False
        self._require(OrderStatus.PLACED, "mark as paid")
        self.status = OrderStatus.PAID
        self.paid_at = at or _utcnow()
        self._touch()
        return True

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def is_empty(self) -> bool:
        return not self.lines

    # --- Internal helpers -----------------------------------------------------

    def _require(self, expected: OrderStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidTransitionError(
                f"Cannot {action} order — current status is {self.status.value}, "
                f"expected {expected.value}"
            )

    def _find_line(self, menu_code: int) -> OrderLine | None:
        for line in self.lines:
            if line.menu_code == menu_code:
                return line
        return None

    def _touch(self) -> None:
        self.updated_at = _utcnow()
