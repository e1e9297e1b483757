"""Integration tests for the VerifyPayment use case, plus the end-to-end
add -> checkout -> pay -> verify scenario."""

import pytest

from chatorder.application.add_item import AddItemHandler
from chatorder.application.checkout import CheckoutHandler
from chatorder.application.initiate_payment import InitiatePaymentHandler
from chatorder.application.mark_paid import MarkPaidHandler
from chatorder.application.session_locks import SessionLocks
from chatorder.application.verify_payment import VerifyPaymentHandler
from chatorder.domain.exceptions import EntityNotFoundError, GatewayError, ValidationError
from chatorder.domain.model.order import OrderStatus
from tests.fakes import FakeMenuRepository, FakeOrderRepository, FakePaymentGateway


def _setup(gateway=None):
    order_repo = FakeOrderRepository()
    locks = SessionLocks()
    gateway = gateway or FakePaymentGateway()
    add = AddItemHandler(order_repo, FakeMenuRepository(), locks)
    checkout = CheckoutHandler(order_repo, locks)
    verify = VerifyPaymentHandler(order_repo, gateway, MarkPaidHandler(order_repo, locks))
    return order_repo, gateway, add, checkout, verify


class TestVerify:

    def test_success_marks_paid(self):
        order_repo, gateway, add, checkout, verify = _setup()
        add.handle("S", 10)
        ref = checkout.handle("S").reference

        result = verify.handle(ref)

        assert result.status == "paid"
        assert result.reference == ref
        assert gateway.verify_calls == [ref]
        order = order_repo.get_by_reference(ref)
        assert order.status == OrderStatus.PAID
        assert order.paid_at is not None

    def test_already_paid_skips_gateway(self):
        order_repo, gateway, add, checkout, verify = _setup()
        add.handle("S", 10)
        ref = checkout.handle("S").reference
        verify.handle(ref)
        paid_at = order_repo.get_by_reference(ref).paid_at

        result = verify.handle(ref)

        assert result.status == "paid"
        assert gateway.verify_calls == [ref]
        assert order_repo.get_by_reference(ref).paid_at == paid_at

    @pytest.mark.parametrize("gateway_status", ["failed", "abandoned", "pending", "reversed"])
    def test_non_success_status_is_reported_without_mutation(self, gateway_status):
        order_repo, _, add, checkout, verify = _setup(FakePaymentGateway(verify_status=gateway_status))
        add.handle("S", 10)
        ref = checkout.handle("S").reference

        result = verify.handle(ref)

        assert result.status == gateway_status
        assert order_repo.get_by_reference(ref).status == OrderStatus.PLACED

    @pytest.mark.parametrize("reference", ["", "   ", None])
    def test_empty_reference_rejected(self, reference):
        *_, verify = _setup()
        with pytest.raises(ValidationError):
            verify.handle(reference)

    def test_unknown_reference(self):
        *_, verify = _setup()
        with pytest.raises(EntityNotFoundError):
            verify.handle("missing")

    def test_gateway_error_propagates(self):
        order_repo, _, add, checkout, verify = _setup(FakePaymentGateway(fail=True))
        add.handle("S", 10)
        ref = checkout.handle("S").reference

        with pytest.raises(GatewayError):
            verify.handle(ref)

        assert order_repo.get_by_reference(ref).status == OrderStatus.PLACED


def test_full_ordering_and_payment_scenario():
    order_repo, gateway, add, checkout, verify = _setup()
    initiate = InitiatePaymentHandler(order_repo, gateway, SessionLocks(), "https://shop.example")

    cart = add.handle("S", 10)
    assert [(l.code, l.quantity) for l in cart.lines] == [(10, 1)] and cart.total == 2500
    cart = add.handle("S", 10)
    assert [(l.code, l.quantity) for l in cart.lines] == [(10, 2)] and cart.total == 5000

    placed = checkout.handle("S")
    assert placed.total == 5000
    ref = placed.reference

    init = initiate.handle("S", ref)
    assert init.authorization_url
    assert order_repo.get_by_reference(ref).status == OrderStatus.PLACED

    assert verify.handle(ref).status == "paid"
    paid = order_repo.get_by_reference(ref)
    assert paid.status == OrderStatus.PAID
    assert paid.paid_at is not None

    assert verify.handle(ref).status == "paid"
    assert gateway.verify_calls == [ref]
