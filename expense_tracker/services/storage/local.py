"""
Local Storage Implementations

JsonFileStore is the default backend: one ``<slot>.json`` file per slot in a
data directory, the closest thing to a browser's local storage on disk.
InMemoryStore keeps slots in a dict and is used by tests.
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from expense_tracker.services.storage.interface import (
    KeyValueStore,
    StorageError,
)


class InMemoryStore(KeyValueStore):
    """Slots held in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value


class JsonFileStore(KeyValueStore):
    """
    One file per slot under ``data_dir``.

    Writes go to a temporary file in the same directory that then replaces
    the slot file, so a crash mid-write leaves the previous value intact.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _slot_path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StorageError(f"Invalid slot name: {key!r}")
        return self._data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._slot_path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read slot '{key}': {e}")

    def set(self, key: str, value: str) -> None:
        path = self._slot_path(key)
        tmp_name = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir,
                prefix=f".{key}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
            raise StorageError(f"Failed to write slot '{key}': {e}")
