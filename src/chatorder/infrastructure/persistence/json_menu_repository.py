"""JSON-file-backed implementation of MenuRepository.

The catalog is seeded with the default menu the first time the file is
found empty.
"""

from __future__ import annotations

import logging
from pathlib import Path

from chatorder.domain.model.menu import MenuEntry
from chatorder.domain.model.value_objects import Money
from chatorder.domain.repository.menu_repository import MenuRepository
from chatorder.infrastructure.persistence.json_file import JsonFile

logger = logging.getLogger(__name__)

DEFAULT_MENU = [
    MenuEntry(code=10, name="Jollof Rice", price=Money(2500), description="Served with chicken"),
    MenuEntry(code=11, name="Fried Rice", price=Money(2400), description="Served with fish"),
    MenuEntry(code=12, name="Burger", price=Money(1800), description="Beef burger with fries"),
    MenuEntry(code=13, name="Pizza Slice", price=Money(1500), description="Cheese pizza"),
    MenuEntry(code=14, name="Salad", price=Money(1200), description="Mixed veggies"),
]


class JsonMenuRepository(MenuRepository):

    def __init__(self, file_path: Path, seed: list[MenuEntry] | None = None) -> None:
        self._file = JsonFile(file_path)
        self._ensure_seeded(DEFAULT_MENU if seed is None else seed)

    # --- MenuRepository interface ---------------------------------------------

    def get_by_code(self, code: int) -> MenuEntry | None:
        return self._load().get(code)

    def list_all(self) -> list[MenuEntry]:
        entries = self._load()
        return [entries[code] for code in sorted(entries)]

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[int, MenuEntry]:
        with self._file.lock:
            raw = self._file.load()
        return {
            item["code"]: MenuEntry(
                code=item["code"],
                name=item["name"],
                price=Money(item["price"], item.get("currency", "NGN")),
                description=item.get("description"),
            )
            for item in raw
        }

    def _ensure_seeded(self, seed: list[MenuEntry]) -> None:
        with self._file.lock:
            if self._file.load():
                return
            self._file.persist(
                [
                    {
                        "code": e.code,
                        "name": e.name,
                        "price": e.price.amount,
                        "currency": e.price.currency,
                        "description": e.description,
                    }
                    for e in seed
                ]
            )
        logger.info("Seeded menu with %d entries", len(seed))
