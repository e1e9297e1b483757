"""Application service: Initiate Payment use case.

Resolves which order the visitor wants to pay for, promotes a
forgotten cart to ``placed`` on the fly, and asks the gateway for an
authorization URL.  The caller redirects the visitor to that URL.

Resolution order:
1. an explicit reference, if given;
2. otherwise the session's most recently updated placed-or-pending order.

A reference belonging to another session is reported as not found.
Any promotion is persisted only once the gateway call has succeeded.
"""

from __future__ import annotations

import logging

from chatorder.application.dto import PaymentInit
from chatorder.application.session_locks import SessionLocks
from chatorder.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    GatewayError,
    InvalidStateError,
)
from chatorder.domain.gateway.payment_gateway import PaymentGateway
from chatorder.domain.model.order import PAYABLE_STATUSES, Order, OrderStatus
from chatorder.domain.repository.order_repository import OrderRepository
from chatorder.domain.service.reference import mint_reference

logger = logging.getLogger(__name__)


class InitiatePaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        gateway: PaymentGateway,
        locks: SessionLocks,
        client_url: str,
        minor_unit_factor: int = 100,
    ) -> None:
        self._order_repo = order_repo
        self._gateway = gateway
        self._locks = locks
        self._client_url = client_url.rstrip("/")
        self._minor_unit_factor = minor_unit_factor

    def handle(self, session_key: str, reference: str | None = None) -> PaymentInit:
        with self._locks.hold(session_key):
            order = self._resolve(session_key, reference)

            promote = order.status == OrderStatus.PENDING
            if promote and order.is_empty:
                raise InvalidStateError("No items to pay for. Add items and checkout.")
            if order.status == OrderStatus.PAID:
                raise ConflictError(f"Order {order.reference} is already paid")
            if not promote and order.status != OrderStatus.PLACED:
                raise InvalidStateError(
                    f"Order is not ready for payment (status: {order.status.value})"
                )

            pay_reference = order.reference or mint_reference(session_key)
            try:
                init = self._gateway.initialize_transaction(
                    amount_minor_units=order.total.to_minor_units(self._minor_unit_factor),
                    customer_ref=f"{session_key}@example.local",
                    reference=pay_reference,
                    callback_url=self._callback_url(pay_reference),
                )
            except GatewayError:
                logger.warning("Gateway failed to initialize payment for %s", pay_reference)
                raise

            if promote:
                order.place(pay_reference)
                self._order_repo.save(order)
                logger.info(
                    "Order #%s auto-placed at payment initiation (reference=%s)",
                    order.id, pay_reference,
                )

        return PaymentInit(
            authorization_url=init.authorization_url,
            access_code=init.access_code,
            reference=pay_reference,
            message="Proceed to the payment page to complete your payment.",
        )

    def _resolve(self, session_key: str, reference: str | None) -> Order:
        if reference:
            order = self._order_repo.get_by_reference(reference)
        else:
            order = self._order_repo.latest_for_session(session_key, PAYABLE_STATUSES)

        if order is None or order.session_key != session_key:
            raise EntityNotFoundError("Order not found. Checkout first.")
        return order

    def _callback_url(self, reference: str) -> str:
        return f"{self._client_url}/chat?paid=1&ref={reference}"
