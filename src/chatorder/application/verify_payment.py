"""Application service: Verify Payment use case.

Only a positive confirmation from the gateway moves an order to
``paid``.  Any other gateway status is reported back unchanged and
leaves the order as it was.  Orders already paid locally are answered
without calling the gateway.
"""

from __future__ import annotations

import logging

from chatorder.application.dto import PaymentVerification
from chatorder.application.mark_paid import MarkPaidHandler
from chatorder.domain.exceptions import EntityNotFoundError, GatewayError, ValidationError
from chatorder.domain.gateway.payment_gateway import PaymentGateway
from chatorder.domain.model.order import OrderStatus
from chatorder.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class VerifyPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        gateway: PaymentGateway,
        mark_paid: MarkPaidHandler,
    ) -> None:
        self._order_repo = order_repo
        self._gateway = gateway
        self._mark_paid = mark_paid

    def handle(self, reference: str) -> PaymentVerification:
        reference = (reference or "").strip()
        if not reference:
            raise ValidationError("Missing payment reference")

        order = self._order_repo.get_by_reference(reference)
        if order is None:
            raise EntityNotFoundError(f"No order with reference '{reference}'")

        if order.status == OrderStatus.PAID:
            return PaymentVerification(
                status=OrderStatus.PAID.value,
                reference=reference,
                message="Order already paid",
            )

        try:
            result = self._gateway.verify_transaction(reference)
        except GatewayError:
            logger.warning("Gateway failed to verify %s", reference)
            raise

        if not result.succeeded:
            logger.info("Payment %s not successful (gateway status=%s)", reference, result.status)
            return PaymentVerification(
                status=result.status,
                reference=reference,
                message="Payment not successful",
            )

        self._mark_paid.handle(reference)
        return PaymentVerification(
            status=OrderStatus.PAID.value,
            reference=reference,
            message="Payment verified",
        )
