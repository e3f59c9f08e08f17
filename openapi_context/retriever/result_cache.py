"""TTL cache for assembled query results."""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Cached value with its creation time and lifetime."""

    value: Any
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.created_at >= self.ttl


class ResultCache:
    """
    Thread-safe TTL cache.

    Entries expire lazily on read and are also removed by a background sweep
    every check_period seconds once start() has been called.
    """

    def __init__(
        self,
        ttl: float = 300.0,
        check_period: float = 60.0,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.check_period = check_period
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[Hashable, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._sweeper: Optional[threading.Thread] = None
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value, or None on a miss or expired entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            return entry.value

    def set(self, key: Hashable, value: Any) -> None:
        """Insert or replace an entry; the oldest entry is evicted when full."""
        with self._lock:
            self._entries.pop(key, None)
            if self.max_entries is not None:
                while len(self._entries) >= self.max_entries > 0:
                    self._entries.popitem(last=False)
            self._entries[key] = CacheEntry(value=value, created_at=self._clock(), ttl=self.ttl)

    def sweep(self) -> int:
        """Remove expired entries; returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug(f"Swept {len(expired)} expired cache entries")
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        return {"entries": len(self), "hits": self.hits, "misses": self.misses, "ttl": self.ttl}

    def start(self) -> None:
        """Start the background sweep thread (idempotent)."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(target=self._sweep_loop, daemon=True, name="ResultCacheSweeper")
        self._sweeper.start()
        logger.info(f"Started result cache sweeper (ttl={self.ttl}s, every {self.check_period}s)")

    def stop(self) -> None:
        """Stop the background sweep thread."""
        self._stop_event.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=max(self.check_period, 1.0))
            self._sweeper = None

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self.check_period):
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Result cache sweep failed: {e}")
