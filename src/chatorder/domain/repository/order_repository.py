"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from chatorder.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_reference(self, reference: str) -> Order | None:
        """Return the order carrying a payment reference, or None."""

    @abstractmethod
    def get_pending(self, session_key: str) -> Order | None:
        """Return the session's pending order (its cart), or None."""

    @abstractmethod
    def list_for_session(
        self, session_key: str, statuses: Iterable[OrderStatus]
    ) -> list[Order]:
        """Return the session's orders in *statuses*, newest first by creation."""

    @abstractmethod
    def latest_for_session(
        self, session_key: str, statuses: Iterable[OrderStatus]
    ) -> Order | None:
        """Return the session's most recently updated order in *statuses*."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning an ID to new ones."""
