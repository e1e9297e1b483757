"""Domain service: payment reference minting.

A reference correlates a local order with a gateway transaction, so it
must be unique across all sessions.  The session key and a millisecond
timestamp make it traceable; the random suffix keeps two checkouts in the
same millisecond for the same session apart.
"""

from __future__ import annotations

import secrets
import time


def mint_reference(session_key: str, now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{session_key}-{now_ms}-{secrets.token_hex(4)}"
