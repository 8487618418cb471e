# objectlog/store/file.py
"""
JSON-file backed object store.

Structure:
    store_dir/
        objects.json     # {"version": ..., "objects": [<BaseObject.to_dict()>, ...]}

The whole index is held in memory (see MemoryStore) and rewritten after
each successful write. Records keep insertion order, so query() order
survives a reload.
"""

import json
import logging
from pathlib import Path

from ..errors import DecodeError
from ..objects import BaseObject
from .memory import MemoryStore

logger = logging.getLogger(__name__)

INDEX_VERSION = "1.0"


class JsonFileStore(MemoryStore):
    """MemoryStore that persists to store_dir/objects.json."""

    def __init__(self, store_dir: Path | str):
        super().__init__()
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)
        self._load()

    def _index_path(self) -> Path:
        return self.store_dir / "objects.json"

    def _load(self):
        """Load objects from disk."""
        index_path = self._index_path()
        if not index_path.exists():
            return
        try:
            with open(index_path) as f:
                data = json.load(f)
            objects = [BaseObject.from_dict(o) for o in data.get("objects", [])]
        except (json.JSONDecodeError, AttributeError, TypeError, DecodeError) as e:
            logger.warning(f"Failed to load object index {index_path}: {e}")
            return
        self._objects = {obj.id: obj for obj in objects}
        logger.debug(f"Loaded {len(self._objects)} objects from {index_path}")

    def _save(self):
        """Save objects to disk."""
        data = {
            "version": INDEX_VERSION,
            "objects": [obj.to_dict() for obj in self._objects.values()],
        }
        with open(self._index_path(), "w") as f:
            json.dump(data, f, indent=2)

    def _changed(self) -> None:
        self._save()
