"""Shared file helpers for the JSON-backed repositories.

Read-modify-write cycles are serialized across threads and processes by
a ``FileLock`` on ``<file>.lock``.  Every save goes to its own temporary
file that then replaces the data file whole.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from filelock import FileLock


class JsonFile:

    def __init__(self, file_path: Path, lock_timeout: float = 30.0) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self.lock = FileLock(f"{file_path}.lock", timeout=lock_timeout)
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._file_path.parent,
            prefix=f".{self._file_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp.write(json.dumps(records, indent=2) + "\n")
        os.replace(tmp.name, self._file_path)

    def _ensure_file(self) -> None:
        with self.lock:
            if not self._file_path.exists():
                self.persist([])
