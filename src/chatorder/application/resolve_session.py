"""Application service: Resolve Session use case.

Maps the token a client presents to a stable session key, issuing a new
key when the client has none, and records the visit.
"""

from __future__ import annotations

import uuid

from chatorder.domain.model.session import Session
from chatorder.domain.repository.session_repository import SessionRepository


class ResolveSessionHandler:

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def handle(self, token: str | None = None, user_agent: str | None = None) -> str:
        sid = (token or "").strip() or str(uuid.uuid4())

        session = self._session_repo.get(sid)
        if session is None:
            session = Session(sid=sid, user_agent=user_agent or "")
        else:
            session.touch(user_agent)
        self._session_repo.save(session)
        return sid
