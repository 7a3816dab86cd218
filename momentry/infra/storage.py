"""Key-value storage backends (the browser's localStorage contract: string keys, string values)."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """load(key) -> str | None, save(key, value), remove(key)."""

    def load(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def save(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def keys(self):
        raise NotImplementedError


class InMemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def save(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self):
        return list(self._items)


class JsonFileStorage(KeyValueStorage):
    """All keys in one JSON object file, rewritten atomically on each change."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = Lock()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Storage file {self.path} does not hold an object; ignoring it")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _atomic_write(self, items: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".storage_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(items, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def load(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def save(self, key: str, value: str) -> None:
        with self._lock:
            items = self._read()
            items[key] = value
            self._atomic_write(items)

    def remove(self, key: str) -> None:
        with self._lock:
            items = self._read()
            if key in items:
                del items[key]
                self._atomic_write(items)

    def keys(self):
        return list(self._read())
