"""Caches for catalog responses, keyed by request URL.

The catalog client reads through whichever cache it is given; callers
that want no cross-process persistence pass a MemoryCache.
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class CatalogCache(Protocol):
    """Anything that can remember a JSON payload by key."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryCache:
    """Process-local cache backed by a dict."""

    def __init__(self):
        self._data: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)


class JsonFileCache:
    """On-disk cache storing one JSON file per key, fronted by a dict."""

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._memory = MemoryCache()

    def _path_for(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
        return self.cache_dir / f"{digest}.json"

    def get(self, key: str) -> Any | None:
        value = self._memory.get(key)
        if value is not None:
            return value

        cache_file = self._path_for(key)
        if not cache_file.exists():
            return None
        try:
            with open(cache_file, "r") as f:
                value = json.load(f)
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable cache file %s", cache_file)
            return None
        self._memory.set(key, value)
        return value

    def set(self, key: str, value: Any) -> None:
        self._memory.set(key, value)
        with open(self._path_for(key), "w") as f:
            json.dump(value, f)
