"""Application service: Chat Dispatcher.

Entry point for one chat round-trip.  Resolves the session, parses the
visitor's text into a command and routes it to the matching use case.

Invalid input and "nothing to do" situations are answered with guidance
and the option list rather than raised as errors.
"""

from __future__ import annotations

from chatorder.application.add_item import AddItemHandler
from chatorder.application.browse_menu import BrowseMenuHandler
from chatorder.application.cancel_order import CancelCurrentOrderHandler
from chatorder.application.checkout import CheckoutHandler
from chatorder.application.commands import (
    MAX_COMMAND_CODE,
    Browse,
    Cancel,
    Checkout,
    Command,
    History,
    Inspect,
    Invalid,
    SelectItem,
    parse_command,
)
from chatorder.application.dto import ChatReply
from chatorder.application.resolve_session import ResolveSessionHandler
from chatorder.application.session_locks import SessionLocks
from chatorder.application.show_order import ShowCurrentOrderHandler, ShowHistoryHandler
from chatorder.domain.model.order import OrderStatus
from chatorder.domain.repository.menu_repository import MenuRepository
from chatorder.domain.repository.order_repository import OrderRepository
from chatorder.domain.repository.session_repository import SessionRepository

OPTIONS = [
    "Select 1 to Place an order",
    "Select 99 to checkout order",
    "Select 98 to see order history",
    "Select 97 to see current order",
    "Select 0 to cancel order",
]


class ChatDispatcher:

    def __init__(
        self,
        order_repo: OrderRepository,
        menu_repo: MenuRepository,
        session_repo: SessionRepository,
        locks: SessionLocks,
        max_code: int = MAX_COMMAND_CODE,
    ) -> None:
        self._menu_repo = menu_repo
        self._max_code = max_code
        self._resolve_session = ResolveSessionHandler(session_repo)
        self._browse = BrowseMenuHandler(menu_repo)
        self._add_item = AddItemHandler(order_repo, menu_repo, locks)
        self._cancel = CancelCurrentOrderHandler(order_repo, locks)
        self._checkout = CheckoutHandler(order_repo, locks)
        self._current = ShowCurrentOrderHandler(order_repo)
        self._history = ShowHistoryHandler(order_repo)

    def handle(
        self,
        session_token: str | None,
        text: str | None,
        user_agent: str | None = None,
    ) -> ChatReply:
        sid = self._resolve_session.handle(session_token, user_agent)
        command = parse_command(text, self._max_code)
        return self._dispatch(sid, command)

    def _dispatch(self, sid: str, command: Command) -> ChatReply:
        if isinstance(command, Invalid):
            return ChatReply(session_key=sid, message=command.reason, options=list(OPTIONS))

        if isinstance(command, Browse):
            return ChatReply(
                session_key=sid,
                message="Please select an item number to add to your order.",
                menu=self._browse.handle(),
            )

        if isinstance(command, Checkout):
            return self._on_checkout(sid)

        if isinstance(command, History):
            history = self._history.handle(sid)
            message = "Here is your order history." if history else "You have no order history yet."
            return ChatReply(session_key=sid, message=message, history=history)

        if isinstance(command, Inspect):
            current = self._current.handle(sid)
            message = "Your cart is empty." if current.is_empty else "Here is your current order."
            return ChatReply(session_key=sid, message=message, current=current)

        if isinstance(command, Cancel):
            result = self._cancel.handle(sid)
            if result.cancelled:
                return ChatReply(session_key=sid, message=result.message)
            return ChatReply(session_key=sid, message=result.message, options=list(OPTIONS))

        if isinstance(command, SelectItem):
            return self._on_select(sid, command.code)

        raise TypeError(f"Unhandled command {command!r}")

    def _on_checkout(self, sid: str) -> ChatReply:
        result = self._checkout.handle(sid)
        if result.reference is None:
            return ChatReply(session_key=sid, message=result.message, options=list(OPTIONS))

        if result.status == OrderStatus.PAID.value:
            message = f"{result.message}. Reference: {result.reference}"
        else:
            message = (
                f"{result.message}. Use \"Pay now\" to complete payment. "
                f"Reference: {result.reference}"
            )
        return ChatReply(
            session_key=sid,
            message=message,
            reference=result.reference,
            total=result.total,
        )

    def _on_select(self, sid: str, code: int) -> ChatReply:
        entry = self._menu_repo.get_by_code(code)
        if entry is None:
            return ChatReply(
                session_key=sid,
                message="Invalid selection. Choose from the menu options.",
                options=list(OPTIONS),
            )

        current = self._add_item.handle(sid, entry.code)
        return ChatReply(
            session_key=sid,
            message=f"{entry.name} added to your order.",
            current=current,
        )
