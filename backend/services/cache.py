# services/cache.py - IN-MEMORY RESULT CACHE
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from config.logging_config import get_logger

logger = get_logger("services.cache")


@dataclass
class CacheEntry:
    value: Any
    inserted_at: float


class TTLCache:
    """
    Time-bounded key/value store for extraction results

    Expiry is evaluated lazily on lookup: an entry older than the TTL is
    dropped and reported as absent. There is no background sweep and no
    capacity limit.
    """

    def __init__(self, ttl_seconds: float = 1800.0, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """
        Get a fresh value

        Args:
            key: Cache key

        Returns:
            Stored value, or None when missing or expired
        """
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                self._misses += 1
                return None

            if self._clock() - entry.inserted_at > self.ttl_seconds:
                del self._entries[key]
                self._misses += 1
                logger.debug(f"⌛ Cache entry expired: {key}")
                return None

            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store a value, overwriting any entry and resetting its age"""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "ttlSeconds": self.ttl_seconds,
            }

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._clock() - entry.inserted_at <= self.ttl_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
