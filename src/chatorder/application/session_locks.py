"""Per-session mutual exclusion for lifecycle-mutating operations.

Every find-or-create / read-modify-write on a session's orders runs while
holding that session's lock.  Different sessions never contend.

Within a process a ``threading.Lock`` per session does the work.  When a
``lock_dir`` is given, ``hold`` also takes a ``FileLock`` on a per-session
file so separate processes sharing the data directory serialize too.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as FileLockTimeout

from chatorder.domain.exceptions import ConflictError

logger = logging.getLogger(__name__)


class SessionLocks:

    def __init__(self, lock_dir: Path | None = None, timeout: float = 30.0) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._lock_dir = lock_dir
        self._timeout = timeout
        if lock_dir is not None:
            lock_dir.mkdir(parents=True, exist_ok=True)

    def for_session(self, session_key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(session_key)
            if lock is None:
                lock = threading.Lock()
                self._locks[session_key] = lock
            return lock

    def lock_path(self, session_key: str) -> Path | None:
        if self._lock_dir is None:
            return None
        # Session keys come from clients; hash them into a safe file name.
        digest = hashlib.sha256(session_key.encode("utf-8")).hexdigest()
        return self._lock_dir / f"session-{digest}.lock"

    @contextmanager
    def hold(self, session_key: str) -> Iterator[None]:
        with self.for_session(session_key):
            path = self.lock_path(session_key)
            if path is None:
                yield
                return

            file_lock = FileLock(str(path), timeout=self._timeout)
            try:
                file_lock.acquire()
            except FileLockTimeout as exc:
                logger.warning("Session %s lock not acquired within %ss", session_key, self._timeout)
                raise ConflictError("Session is busy with another request. Please try again.") from exc
            try:
                yield
            finally:
                file_lock.release()
