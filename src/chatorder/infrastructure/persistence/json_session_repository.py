"""JSON-file-backed implementation of SessionRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from chatorder.domain.model.session import Session
from chatorder.domain.repository.session_repository import SessionRepository
from chatorder.infrastructure.persistence.json_file import JsonFile


class JsonSessionRepository(SessionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get(self, sid: str) -> Session | None:
        with self._file.lock:
            records = self._file.load()
        for raw in records:
            if raw["sid"] == sid:
                return Session(
                    sid=raw["sid"],
                    last_seen_at=datetime.fromisoformat(raw["last_seen_at"]),
                    user_agent=raw.get("user_agent", ""),
                )
        return None

    def save(self, session: Session) -> None:
        record = {
            "sid": session.sid,
            "last_seen_at": session.last_seen_at.isoformat(),
            "user_agent": session.user_agent,
        }
        with self._file.lock:
            records = [r for r in self._file.load() if r["sid"] != session.sid]
            records.append(record)
            self._file.persist(records)
