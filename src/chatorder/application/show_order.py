"""Application services: current order and order history (queries)."""

from __future__ import annotations

from chatorder.application.dto import OrderDTO, empty_cart
from chatorder.domain.model.order import HISTORY_STATUSES
from chatorder.domain.repository.order_repository import OrderRepository


class ShowCurrentOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, session_key: str) -> OrderDTO:
        """Return the session's cart, or the empty-cart sentinel."""
        order = self._order_repo.get_pending(session_key)
        if order is None:
            return empty_cart(session_key)
        return OrderDTO.from_order(order)


class ShowHistoryHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, session_key: str) -> list[OrderDTO]:
        """Placed, paid and cancelled orders, newest first.  Never the cart."""
        orders = self._order_repo.list_for_session(session_key, HISTORY_STATUSES)
        return [OrderDTO.from_order(order) for order in orders]
