from __future__ import annotations

import json
import logging
import os
import tempfile
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from bmc_web.domain.errors import StorageLoadError, StorageWriteError
from bmc_web.domain.models import Canvas, HistoryItem, derive_preview, is_submittable

log = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "bmc_history"
DEFAULT_CAPACITY = 20


class KeyValueStorage:
    """Strategy interface."""
    def read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write(self, key: str, value: str) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class JsonFileStorage(KeyValueStorage):
    """
    One JSON file per key under base_dir.
    Writes go to a temp file first and are swapped in with os.replace.
    """
    base_dir: Path

    def _path_for(self, key: str) -> Path:
        return self.base_dir / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageLoadError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=str(self.base_dir), prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}") from e


def _parse_log(raw: str, capacity: int) -> list[HistoryItem]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageLoadError(f"History is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise StorageLoadError("History must be a JSON array.")

    items: list[HistoryItem] = []
    seen: set[str] = set()
    for entry in data:
        if not isinstance(entry, dict):
            log.warning("Skipping history entry that is not an object: %r", entry)
            continue
        try:
            item = HistoryItem.from_dict(entry)
        except ValueError as e:
            log.warning("Skipping malformed history entry: %s", e)
            continue
        if item.id in seen:
            continue
        seen.add(item.id)
        items.append(item)
    return items[:capacity]


@dataclass
class HistoryRepository:
    """
    Repository pattern: bounded, newest-first log of saved canvases.
    Every mutation rewrites the whole log to storage before returning.
    """
    storage: KeyValueStorage
    key: str = DEFAULT_STORAGE_KEY
    capacity: int = DEFAULT_CAPACITY
    last_write_error: Optional[StorageWriteError] = field(default=None, init=False)
    _items: list[HistoryItem] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError("History capacity must be at least 1.")

    @property
    def items(self) -> tuple[HistoryItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def load(self) -> tuple[HistoryItem, ...]:
        try:
            raw = self.storage.read(self.key)
            self._items = _parse_log(raw, self.capacity) if raw else []
        except StorageLoadError as e:
            log.error("Failed to load history, starting empty: %s", e)
            self._items = []
        return self.items

    def get(self, item_id: str) -> Optional[HistoryItem]:
        return next((h for h in self._items if h.id == item_id), None)

    def save(self, canvas: Canvas) -> tuple[HistoryItem, ...]:
        if not is_submittable(canvas):
            return self.items

        item = HistoryItem(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc).isoformat(),
            preview=derive_preview(canvas),
            data=canvas,
        )
        self._items = [item, *self._items][: self.capacity]
        self._persist()
        return self.items

    def delete(self, item_id: str) -> tuple[HistoryItem, ...]:
        self._items = [h for h in self._items if h.id != item_id]
        self._persist()
        return self.items

    def restore(self, item_id: str) -> Optional[Canvas]:
        item = self.get(item_id)
        return item.data if item else None

    def _persist(self) -> None:
        payload = json.dumps([h.to_dict() for h in self._items], ensure_ascii=False)
        try:
            self.storage.write(self.key, payload)
        except StorageWriteError as e:
            log.warning("History changed in memory but was not persisted: %s", e)
            self.last_write_error = e
        else:
            self.last_write_error = None
