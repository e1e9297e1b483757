"""Integration tests for the InitiatePayment use case."""

import pytest

from chatorder.application.add_item import AddItemHandler
from chatorder.application.checkout import CheckoutHandler
from chatorder.application.initiate_payment import InitiatePaymentHandler
from chatorder.application.mark_paid import MarkPaidHandler
from chatorder.application.session_locks import SessionLocks
from chatorder.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    GatewayError,
    InvalidStateError,
)
from chatorder.domain.model.order import Order, OrderStatus
from tests.fakes import FakeMenuRepository, FakeOrderRepository, FakePaymentGateway


class _Env:

    def __init__(self, gateway: FakePaymentGateway | None = None) -> None:
        self.order_repo = FakeOrderRepository()
        self.locks = SessionLocks()
        self.gateway = gateway or FakePaymentGateway()
        self.add = AddItemHandler(self.order_repo, FakeMenuRepository(), self.locks)
        self.checkout = CheckoutHandler(self.order_repo, self.locks)
        self.initiate = InitiatePaymentHandler(
            self.order_repo, self.gateway, self.locks, client_url="https://shop.example/"
        )


class TestInitiateHappyPath:

    def test_placed_order_by_reference(self):
        env = _Env()
        env.add.handle("S", 10)
        env.add.handle("S", 10)
        ref = env.checkout.handle("S").reference

        result = env.initiate.handle("S", ref)

        assert result.reference == ref
        assert result.authorization_url == f"https://pay.example/{ref}"
        call = env.gateway.init_calls[0]
        assert call["amount_minor_units"] == 500000
        assert call["customer_ref"] == "S@example.local"
        assert call["callback_url"] == f"https://shop.example/chat?paid=1&ref={ref}"
        assert env.order_repo.get_by_reference(ref).status == OrderStatus.PLACED

    def test_without_reference_uses_latest_placed_order(self):
        env = _Env()
        env.add.handle("S", 10)
        ref = env.checkout.handle("S").reference

        assert env.initiate.handle("S").reference == ref

    def test_pending_order_is_auto_placed(self):
        env = _Env()
        env.add.handle("S", 12)

        result = env.initiate.handle("S")

        order = env.order_repo.get_by_reference(result.reference)
        assert order.status == OrderStatus.PLACED
        assert env.order_repo.get_pending("S") is None
        assert env.gateway.init_calls[0]["reference"] == result.reference

    def test_initiate_twice_keeps_reference(self):
        env = _Env()
        env.add.handle("S", 12)

        first = env.initiate.handle("S")
        second = env.initiate.handle("S")

        assert second.reference == first.reference


class TestInitiateFailures:

    def test_no_order(self):
        env = _Env()
        with pytest.raises(EntityNotFoundError, match="Checkout first"):
            env.initiate.handle("S")
        assert env.gateway.init_calls == []

    def test_reference_from_another_session_is_not_found(self):
        env = _Env()
        env.add.handle("VICTIM", 10)
        ref = env.checkout.handle("VICTIM").reference
        before = env.order_repo.get_by_reference(ref)

        with pytest.raises(EntityNotFoundError):
            env.initiate.handle("ATTACKER", ref)

        after = env.order_repo.get_by_reference(ref)
        assert after.status == before.status
        assert after.updated_at == before.updated_at
        assert env.gateway.init_calls == []

    def test_paid_order_conflicts(self):
        env = _Env()
        env.add.handle("S", 10)
        ref = env.checkout.handle("S").reference
        MarkPaidHandler(env.order_repo, env.locks).handle(ref)

        with pytest.raises(ConflictError, match="already paid"):
            env.initiate.handle("S", ref)

    def test_cancelled_order_is_not_payable(self):
        env = _Env()
        order = Order.open("S")
        order.reference = "R-CANCELLED"
        env.order_repo.save(order)
        stored = env.order_repo.get_by_reference("R-CANCELLED")
        stored.cancel()
        env.order_repo.save(stored)

        with pytest.raises(InvalidStateError, match="not ready for payment"):
            env.initiate.handle("S", "R-CANCELLED")

    def test_empty_pending_order_is_not_payable(self):
        env = _Env()
        env.order_repo.save(Order.open("S"))

        with pytest.raises(InvalidStateError, match="No items to pay for"):
            env.initiate.handle("S")

    def test_gateway_failure_leaves_pending_order_untouched(self):
        env = _Env(FakePaymentGateway(fail=True))
        env.add.handle("S", 10)

        with pytest.raises(GatewayError):
            env.initiate.handle("S")

        pending = env.order_repo.get_pending("S")
        assert pending is not None
        assert pending.reference is None
