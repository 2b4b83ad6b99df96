"""Shared file helpers for the JSON repositories.

Each JSON file holds a list of records.  Writers that must check-then-
write (conditional appends, versioned saves) do so inside ``locked()``.
That holds an in-process lock for threads plus an OS-level lock on a
``<file>.lock`` sidecar, so separate ``pos`` processes are serialised
too.  The lock is held for a single repository call, never across calls.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        return _locks.setdefault(path, threading.RLock())


class JsonStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = _lock_for(self._file_path)
        self._file_lock = FileLock(str(self.lock_path))
        with self.locked():
            self._ensure_file()

    @property
    def lock_path(self) -> Path:
        return self._file_path.with_suffix(self._file_path.suffix + ".lock")

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock, self._file_lock:
            yield

    def load(self) -> list[dict]:
        with self.locked():
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        with self.locked():
            tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, self._file_path)

    def next_id(self) -> str:
        records = self.load()
        if not records:
            return "1"
        return str(max(int(r["id"]) for r in records) + 1)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.write_text("[]", encoding="utf-8")
