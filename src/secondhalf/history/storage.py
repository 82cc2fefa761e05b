"""
Local per-device key/value storage backed by a single JSON file.

Each key is a named slot holding a string. Writes replace the file
atomically; ``compare_and_set`` gives callers an atomic read-modify-write
within the process.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional

from secondhalf.llm.errors import PersistenceError
from secondhalf.utils.logging_utils import get_logger
from secondhalf.utils.paths import PathLike

logger = get_logger(__name__)

_LOCKS: Dict[Path, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _LOCKS_GUARD:
        lock = _LOCKS.get(path)
        if lock is None:
            lock = _LOCKS[path] = threading.RLock()
        return lock


class LocalStorage:
    """Named string slots persisted in one JSON file."""

    def __init__(self, path: PathLike):
        self.path = Path(path).expanduser().resolve()
        self._lock = _lock_for(self.path)

    def _read_all(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PersistenceError(f"cannot read {self.path}: {exc}") from exc

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise PersistenceError(f"storage file {self.path} is corrupt: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"storage file {self.path} is not a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise PersistenceError(f"cannot write {self.path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._write_all(data)

    def compare_and_set(self, key: str, expected: Optional[str], value: str) -> bool:
        """
        Store ``value`` only if the slot still holds ``expected``.

        Parameters
        ----------
        key : str
            Slot name.
        expected : str | None
            Value read earlier by the caller; None means "slot absent".
        value : str
            New value.

        Returns
        -------
        bool
            True if written, False if another writer changed the slot first.
        """
        with self._lock:
            data = self._read_all()
            if data.get(key) != expected:
                logger.warning("Slot %r changed concurrently; write rejected", key)
                return False
            data[key] = value
            self._write_all(data)
            return True
