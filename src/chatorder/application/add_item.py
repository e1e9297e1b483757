"""Application service: Add Item use case.

Find-or-create the session's pending order and add one unit of the
selected menu item to it.  The whole read-modify-write runs under the
session lock so concurrent additions neither create a second pending
order nor lose an increment.
"""

from __future__ import annotations

import logging

from chatorder.application.dto import OrderDTO
from chatorder.application.session_locks import SessionLocks
from chatorder.domain.exceptions import EntityNotFoundError
from chatorder.domain.model.order import Order
from chatorder.domain.repository.menu_repository import MenuRepository
from chatorder.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class AddItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        menu_repo: MenuRepository,
        locks: SessionLocks,
    ) -> None:
        self._order_repo = order_repo
        self._menu_repo = menu_repo
        self._locks = locks

    def handle(self, session_key: str, menu_code: int) -> OrderDTO:
        entry = self._menu_repo.get_by_code(menu_code)
        if entry is None:
            raise EntityNotFoundError(f"Menu item {menu_code} not found")

        with self._locks.hold(session_key):
            order = self._order_repo.get_pending(session_key)
            if order is None:
                order = Order.open(session_key)
                logger.debug("Opening new cart for session %s", session_key)

            order.add_item(entry)
            self._order_repo.save(order)

        return OrderDTO.from_order(order)
