"""Application service: Browse Menu use case (query)."""

from __future__ import annotations

from chatorder.application.dto import MenuEntryDTO
from chatorder.domain.repository.menu_repository import MenuRepository


class BrowseMenuHandler:

    def __init__(self, menu_repo: MenuRepository) -> None:
        self._menu_repo = menu_repo

    def handle(self) -> list[MenuEntryDTO]:
        return [MenuEntryDTO.from_entry(entry) for entry in self._menu_repo.list_all()]
