"""Abstract repository for visitor sessions."""

from __future__ import annotations

from abc import ABC, abstractmethod

from chatorder.domain.model.session import Session


class SessionRepository(ABC):

    @abstractmethod
    def get(self, sid: str) -> Session | None:
        """Return the session with key *sid*, or None."""

    @abstractmethod
    def save(self, session: Session) -> None:
        """Insert or update a session."""
