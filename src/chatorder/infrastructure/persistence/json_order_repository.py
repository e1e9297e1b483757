"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from chatorder.domain.model.order import Order, OrderLine, OrderStatus
from chatorder.domain.model.value_objects import Money, Quantity
from chatorder.domain.repository.order_repository import OrderRepository
from chatorder.infrastructure.persistence.json_file import JsonFile

logger = logging.getLogger(__name__)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        return self._find_one(lambda raw: raw["id"] == order_id)

    def get_by_reference(self, reference: str) -> Order | None:
        return self._find_one(lambda raw: raw.get("reference") == reference)

    def get_pending(self, session_key: str) -> Order | None:
        return self._find_one(
            lambda raw: raw["session_key"] == session_key
            and raw["status"] == OrderStatus.PENDING.value
        )

    def list_for_session(
        self, session_key: str, statuses: Iterable[OrderStatus]
    ) -> list[Order]:
        orders = self._matching(session_key, statuses)
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def latest_for_session(
        self, session_key: str, statuses: Iterable[OrderStatus]
    ) -> Order | None:
        orders = self._matching(session_key, statuses)
        if not orders:
            return None
        return max(orders, key=lambda o: o.updated_at)

    def save(self, order: Order) -> None:
        with self._file.lock:
            orders = self._file.load()

            if order.id is None:
                order.id = max((o["id"] for o in orders), default=0) + 1

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    replaced = True
                    break
            if not replaced:
                orders.append(self._to_raw(order))

            self._file.persist(orders)
        logger.debug("Saved order #%s (status=%s)", order.id, order.status.value)

    # --- Queries --------------------------------------------------------------

    def _find_one(self, predicate) -> Order | None:
        with self._file.lock:
            records = self._file.load()
        for raw in records:
            if predicate(raw):
                return self._to_domain(raw)
        return None

    def _matching(self, session_key: str, statuses: Iterable[OrderStatus]) -> list[Order]:
        wanted = {s.value for s in statuses}
        with self._file.lock:
            records = self._file.load()
        return [
            self._to_domain(raw)
            for raw in records
            if raw["session_key"] == session_key and raw["status"] in wanted
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "session_key": order.session_key,
            "status": order.status.value,
            "reference": order.reference,
            "total": order.total.amount,
            "paid_at": order.paid_at.isoformat() if order.paid_at else None,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "lines": [
                {
                    "menu_code": line.menu_code,
                    "name": line.name,
                    "quantity": line.quantity.value,
                    "unit_price": line.unit_price.amount,
                    "currency": line.unit_price.currency,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = [
            OrderLine(
                menu_code=line["menu_code"],
                name=line["name"],
                quantity=Quantity(line["quantity"]),
                unit_price=Money(line["unit_price"], line.get("currency", "NGN")),
            )
            for line in raw["lines"]
        ]
        return Order(
            id=raw["id"],
            session_key=raw["session_key"],
            lines=lines,
            status=OrderStatus(raw["status"]),
            reference=raw.get("reference"),
            paid_at=datetime.fromisoformat(raw["paid_at"]) if raw.get("paid_at") else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
