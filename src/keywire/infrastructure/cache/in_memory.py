import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from keywire.domain import IMetadataCacheStore


class InMemoryMetadataCache(IMetadataCacheStore):
    """Process-local key/value store with per-entry expiry.

    Every operation holds a lock, so reads and writes of a key are atomic
    across threads. Expired entries are dropped lazily on read.

    Attributes:
        _entries: Mapping of key to ``(value, expires_at)``; ``expires_at`` is
            ``None`` for entries that never expire.
        _clock: Monotonic clock used for expiry.

    Example:
        >>> store = InMemoryMetadataCache()
        >>> container = Container(cache=store, cache_ttl=300)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        expires_at = None if ttl is None else self._clock() + ttl
        with self._lock:
            self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
