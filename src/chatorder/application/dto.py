"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the front-end and application layers without
exposing domain internals.  Amounts are plain integers in the catalog
currency so the transport can serialize them directly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from chatorder.domain.model.menu import MenuEntry
from chatorder.domain.model.order import Order

NO_ORDER_STATUS = "none"


@dataclass(frozen=True)
class MenuEntryDTO:

    code: int
    name: str
    price: int
    description: str | None = None

    @staticmethod
    def from_entry(entry: MenuEntry) -> MenuEntryDTO:
        return MenuEntryDTO(
            code=entry.code,
            name=entry.name,
            price=entry.price.amount,
            description=entry.description,
        )


@dataclass(frozen=True)
class OrderLineDTO:
    """A single line as displayed to the user."""

    code: int
    name: str
    quantity: int
    unit_price: int
    line_total: int


@dataclass(frozen=True)
class OrderDTO:
    """A complete order (or the empty cart) as displayed to the user."""

    session_key: str
    status: str
    total: int
    lines: list[OrderLineDTO] = field(default_factory=list)
    id: int | None = None
    reference: str | None = None
    created_at: str | None = None
    paid_at: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            session_key=order.session_key,
            status=order.status.value,
            lines=[
                OrderLineDTO(
                    code=line.menu_code,
                    name=line.name,
                    quantity=line.quantity.value,
                    unit_price=line.unit_price.amount,
                    line_total=line.line_total.amount,
                )
                for line in order.lines
            ],
            total=order.total.amount,
            reference=order.reference,
            created_at=order.created_at.isoformat(),
            paid_at=order.paid_at.isoformat() if order.paid_at else None,
        )


def empty_cart(session_key: str) -> OrderDTO:
    """The cart shown when a session has no pending order."""
    return OrderDTO(session_key=session_key, status=NO_ORDER_STATUS, total=0)


@dataclass(frozen=True)
class CancelResult:

    cancelled: bool
    message: str


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of a checkout.  ``reference`` is set only when an order was placed."""

    message: str
    total: int | None = None
    reference: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class PaymentInit:

    authorization_url: str
    reference: str
    message: str
    access_code: str | None = None


@dataclass(frozen=True)
class PaymentVerification:

    status: str
    message: str
    reference: str | None = None


@dataclass(frozen=True)
class ChatReply:
    """Reply to one chat round-trip.

    Optional fields are present only when the command produced them;
    ``to_dict`` drops the absent ones.
    """

    session_key: str
    message: str
    options: list[str] | None = None
    menu: list[MenuEntryDTO] | None = None
    current: OrderDTO | None = None
    history: list[OrderDTO] | None = None
    reference: str | None = None
    total: int | None = None

    def to_dict(self) -> dict:
        return {key: value for key, value in asdict(self).items() if value is not None}
