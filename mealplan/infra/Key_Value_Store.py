"""Key-value persistence providers (get/set/remove of JSON strings by key).

The planner only ever stores a handful of JSON documents (meal plan, shopping
list, recipes), so the store is a plain string map. Parsing is left to the
repositories.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional, Any, List, Protocol

from mealplan.utilities.errors import MalformedPersistedDataError, PersistenceWriteError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStore:
    """Process-local store; used by tests and the STORE_BACKEND=memory setting."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise PersistenceWriteError(key, "value must be a string")
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """One `<key>.json` file per key inside `data_dir`; writes go through a temp file + move."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = None
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self.data_dir), prefix=f".{key}_", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(value)
            shutil.move(tmp_path, path)
        except OSError as e:
            raise PersistenceWriteError(key, str(e)) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            if path.exists():
                path.unlink()
        except OSError as e:
            raise PersistenceWriteError(key, str(e)) from e


def decode_list(key: str, raw: Optional[str]) -> List[Any]:
    """Parse a stored JSON list. Absent -> []; anything unparsable or not a list raises."""
    if raw is None or raw == "":
        return []
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedPersistedDataError(key, str(e)) from e
    if not isinstance(data, list):
        raise MalformedPersistedDataError(key, f"expected a list, got {type(data).__name__}")
    return data


def encode_list(items: List[Any]) -> str:
    return json.dumps(items, ensure_ascii=False, indent=2)


__all__ = ['KeyValueStore', 'InMemoryStore', 'JsonFileStore', 'decode_list', 'encode_list']
