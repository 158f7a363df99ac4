"""Memoization of resolution results.

Entries live as long as the cache does. The keyspace is bounded by the
distinct (parent, specifier) import edges of the program, so nothing is
evicted.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from .models import ResolvedLocation

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "|"


def make_cache_key(parent_url: str | None, specifier: str) -> str:
    """Build the cache key for an import edge.

    An entry-point import (no parent) uses the empty string for the parent.
    """
    return f"{parent_url or ''}{KEY_SEPARATOR}{specifier}"


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0


class ResolutionCache:
    """Thread-safe map from cache key to ResolvedLocation."""

    def __init__(self):
        self._entries: dict[str, ResolvedLocation] = {}
        self._lock = threading.Lock()
        # One lock per key being computed, so distinct keys resolve in parallel
        self._key_locks: dict[str, threading.Lock] = {}
        self.stats = CacheStats()

    def get(self, key: str) -> ResolvedLocation | None:
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.stats.misses += 1
            else:
                self.stats.hits += 1
            return value

    def put(self, key: str, value: ResolvedLocation) -> None:
        with self._lock:
            self._entries[key] = value

    def get_or_compute(self, key: str, compute: Callable[[], ResolvedLocation]) -> ResolvedLocation:
        """Return the entry for ``key``, computing and storing it if absent.

        Concurrent callers for the same key wait for a single computation.
        If ``compute`` raises, nothing is stored and the error propagates.
        """
        with self._lock:
            value = self._entries.get(key)
            if value is not None:
                return value
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                value = self._entries.get(key)
            if value is not None:
                return value

            try:
                value = compute()
                with self._lock:
                    self._entries[key] = value
            finally:
                with self._lock:
                    self._key_locks.pop(key, None)
            logger.debug(f"Cached resolution {key} -> {value.url}")
            return value

    @property
    def in_flight(self) -> int:
        """Number of keys with a computation lock outstanding."""
        with self._lock:
            return len(self._key_locks)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.stats = CacheStats()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"ResolutionCache({len(self)} entries)"
