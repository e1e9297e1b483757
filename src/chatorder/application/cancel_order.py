"""Application service: Cancel Current Order use case.

Cancelling when there is no cart is a no-op acknowledgement, not an
error.  A cancelled order is terminal; the next item added opens a
fresh cart.
"""

from __future__ import annotations

import logging

from chatorder.application.dto import CancelResult
from chatorder.application.session_locks import SessionLocks
from chatorder.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CancelCurrentOrderHandler:

    def __init__(self, order_repo: OrderRepository, locks: SessionLocks) -> None:
        self._order_repo = order_repo
        self._locks = locks

    def handle(self, session_key: str) -> CancelResult:
        with self._locks.hold(session_key):
            order = self._order_repo.get_pending(session_key)
            if order is None:
                return CancelResult(cancelled=False, message="No current order to cancel")

            order.cancel()
            self._order_repo.save(order)

        logger.info("Order #%s cancelled for session %s", order.id, session_key)
        return CancelResult(cancelled=True, message="Order cancelled")
