"""
Key-value persistence for ZenScribe.

A storage medium holds plain strings under string keys, the same shape as a
browser's local storage. ``StoreAdapter`` sits on top of it and turns the
three application records into JSON and back. A missing or broken record is
logged and treated as absent; nothing here raises into the caller.
"""
import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from pydantic import BaseModel, TypeAdapter, ValidationError

from zenscribe.core.logger import log_event
from zenscribe.exceptions import PersistenceUnavailable

HISTORY_KEY = "article_history"
USER_KEY = "zenscribe_user"
DESTINATION_KEY = "zenscribe_wp_config"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed medium, lost when the process exits."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe_key = "".join(c for c in key if c.isalnum() or c in ("_", "-"))
        if not safe_key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{safe_key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as err:
            raise PersistenceUnavailable(f"Cannot read {path}: {err}") from err

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.parent / (path.name + ".tmp")
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as err:
            raise PersistenceUnavailable(f"Cannot write {path}: {err}") from err

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as err:
            raise PersistenceUnavailable(f"Cannot remove {path}: {err}") from err


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


class StoreAdapter:
    """Serializes named records to a ``KeyValueStorage``."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def load(self, key: str, schema: Any) -> Any:
        """
        Return the record stored under ``key`` validated as ``schema``
        (a pydantic model or a type such as ``list[Article]``), or None.
        """
        try:
            raw = self.storage.get_item(key)
        except PersistenceUnavailable as err:
            log_event("ERROR", f"Storage read failed for {key}: {err}")
            return None
        if raw is None:
            return None

        try:
            return TypeAdapter(schema).validate_json(raw)
        except ValidationError as err:
            log_event("WARNING", f"Discarding malformed record {key}", {"errors": err.error_count()})
            return None

    def save(self, key: str, value: Any) -> bool:
        try:
            payload = json.dumps(_to_jsonable(value), ensure_ascii=False)
        except (TypeError, ValueError) as err:
            log_event("ERROR", f"Cannot serialize record {key}: {err}")
            return False
        try:
            self.storage.set_item(key, payload)
        except PersistenceUnavailable as err:
            log_event("ERROR", f"Storage write failed for {key}: {err}")
            return False
        return True

    def remove(self, key: str) -> bool:
        try:
            self.storage.remove_item(key)
        except PersistenceUnavailable as err:
            log_event("ERROR", f"Storage remove failed for {key}: {err}")
            return False
        return True
