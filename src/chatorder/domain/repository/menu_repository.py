"""Abstract repository for the menu catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from chatorder.domain.model.menu import MenuEntry


class MenuRepository(ABC):

    @abstractmethod
    def get_by_code(self, code: int) -> MenuEntry | None:
        """Return the entry selected by *code*, or None."""

    @abstractmethod
    def list_all(self) -> list[MenuEntry]:
        """Return every entry, ordered by code ascending."""
