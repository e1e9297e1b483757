"""Application service: Checkout use case.

Places the session's cart: pending -> placed, minting a payment
reference.  Checkout is idempotent.  When there is no cart but the
session's latest order is already placed or paid, that order's
reference is returned again instead of placing anything.
"""

from __future__ import annotations

import logging

from chatorder.application.dto import CheckoutResult
from chatorder.application.session_locks import SessionLocks
from chatorder.domain.model.order import HISTORY_STATUSES, Order, OrderStatus
from chatorder.domain.repository.order_repository import OrderRepository
from chatorder.domain.service.reference import mint_reference

logger = logging.getLogger(__name__)

NOTHING_TO_PLACE = "No order to place"


class CheckoutHandler:

    def __init__(self, order_repo: OrderRepository, locks: SessionLocks) -> None:
        self._order_repo = order_repo
        self._locks = locks

    def handle(self, session_key: str) -> CheckoutResult:
        with self._locks.hold(session_key):
            order = self._order_repo.get_pending(session_key)

            if order is None:
                return self._replay_latest(session_key)
            if order.is_empty:
                return CheckoutResult(message=NOTHING_TO_PLACE)

            order.place(mint_reference(session_key))
            self._order_repo.save(order)

        logger.info(
            "Order #%s placed for session %s (reference=%s, total=%s)",
            order.id, session_key, order.reference, order.total,
        )
        return self._result("Order placed", order)

    def _replay_latest(self, session_key: str) -> CheckoutResult:
        latest = self._order_repo.latest_for_session(session_key, HISTORY_STATUSES)
        if latest is None:
            return CheckoutResult(message=NOTHING_TO_PLACE)
        if latest.status == OrderStatus.PAID:
            return self._result("Order already paid", latest)
        if latest.status == OrderStatus.PLACED:
            return self._result("Order already placed", latest)
        return CheckoutResult(message=NOTHING_TO_PLACE)

    @staticmethod
    def _result(message: str, order: Order) -> CheckoutResult:
        return CheckoutResult(
            message=message,
            total=order.total.amount,
            reference=order.reference,
            status=order.status.value,
        )
