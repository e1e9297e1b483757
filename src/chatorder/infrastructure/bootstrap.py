"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from chatorder.application.chat_dispatcher import ChatDispatcher
from chatorder.application.initiate_payment import InitiatePaymentHandler
from chatorder.application.mark_paid import MarkPaidHandler
from chatorder.application.session_locks import SessionLocks
from chatorder.application.verify_payment import VerifyPaymentHandler
from chatorder.infrastructure.config import Settings
from chatorder.infrastructure.gateway.paystack_gateway import PaystackGateway
from chatorder.infrastructure.persistence.json_menu_repository import JsonMenuRepository
from chatorder.infrastructure.persistence.json_order_repository import JsonOrderRepository
from chatorder.infrastructure.persistence.json_session_repository import (
    JsonSessionRepository,
)

# One lock registry and one repository per data file for the whole process.
@lru_cache(maxsize=None)
def session_locks(settings: Settings) -> SessionLocks:
    return SessionLocks(settings.data_dir / "locks")


@lru_cache(maxsize=None)
def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


@lru_cache(maxsize=None)
def menu_repository(settings: Settings) -> JsonMenuRepository:
    return JsonMenuRepository(settings.data_dir / "menu.json")


@lru_cache(maxsize=None)
def session_repository(settings: Settings) -> JsonSessionRepository:
    return JsonSessionRepository(settings.data_dir / "sessions.json")


def payment_gateway(settings: Settings) -> PaystackGateway:
    settings.validate_gateway()
    return PaystackGateway(
        secret_key=settings.paystack_secret_key,
        base_url=settings.paystack_base_url,
        timeout=settings.gateway_timeout_seconds,
    )


def chat_dispatcher(settings: Settings) -> ChatDispatcher:
    return ChatDispatcher(
        order_repo=order_repository(settings),
        menu_repo=menu_repository(settings),
        session_repo=session_repository(settings),
        locks=session_locks(settings),
        max_code=settings.max_command_code,
    )


def initiate_payment_handler(settings: Settings) -> InitiatePaymentHandler:
    return InitiatePaymentHandler(
        order_repo=order_repository(settings),
        gateway=payment_gateway(settings),
        locks=session_locks(settings),
        client_url=settings.client_url,
        minor_unit_factor=settings.minor_unit_factor,
    )


def verify_payment_handler(settings: Settings) -> VerifyPaymentHandler:
    order_repo = order_repository(settings)
    return VerifyPaymentHandler(
        order_repo=order_repo,
        gateway=payment_gateway(settings),
        mark_paid=MarkPaidHandler(order_repo, session_locks(settings)),
    )
