"""Application service: Mark Paid use case.

Called by payment verification once the gateway has confirmed a
transaction.  Idempotent: an order that is already paid is returned
unchanged, keeping its original ``paid_at``.
"""

from __future__ import annotations

import logging

from chatorder.application.dto import OrderDTO
from chatorder.application.session_locks import SessionLocks
from chatorder.domain.exceptions import EntityNotFoundError
from chatorder.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class MarkPaidHandler:

    def __init__(self, order_repo: OrderRepository, locks: SessionLocks) -> None:
        self._order_repo = order_repo
        self._locks = locks

    def handle(self, reference: str) -> OrderDTO:
        order = self._order_repo.get_by_reference(reference)
        if order is None:
            raise EntityNotFoundError(f"No order with reference '{reference}'")

        with self._locks.hold(order.session_key):
            # Re-read under the lock; the first read only told us which session.
            order = self._order_repo.get_by_reference(reference)
            if order is None:
                raise EntityNotFoundError(f"No order with reference '{reference}'")

            # Raises InvalidTransitionError unless the order is placed or paid.
            if order.mark_paid():
                self._order_repo.save(order)
                logger.info("Order #%s paid (reference=%s)", order.id, reference)

        return OrderDTO.from_order(order)
