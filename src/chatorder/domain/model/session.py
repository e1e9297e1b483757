"""Session — one visitor's ordering context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Session:

    sid: str
    last_seen_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_agent: str = ""

    def touch(self, user_agent: str | None = None) -> None:
        """Record a new round-trip from the visitor."""
        self.last_seen_at = datetime.now(timezone.utc)
        if user_agent is not None:
            self.user_agent = user_agent
