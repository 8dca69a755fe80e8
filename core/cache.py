# core/cache.py

"""
In-memory key/value cache with per-entry TTL.

Lives inside ``LocalStorage`` so a sign-out wipes it together with the
auth tokens. Entity collections are never cached here.
"""

import time
from threading import Lock
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_TTL_SECONDS = 300


class SimpleCache:
    """
    Entries are ``key -> (value, expires_at)`` on the monotonic clock.
    Expired entries are dropped lazily when read or counted.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = Lock()

    def _purge(self, now: float):
        expired = [k for k, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    def get(self, key: str) -> Optional[Any]:
        """Cached value, or None when missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if expires_at <= time.monotonic():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: float = DEFAULT_TTL_SECONDS):
        with self._lock:
            self._entries[key] = (value, time.monotonic() + ttl_seconds)

    def delete(self, key: str):
        with self._lock:
            self._entries.pop(key, None)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def keys(self) -> List[str]:
        with self._lock:
            self._purge(time.monotonic())
            return list(self._entries)

    def size(self) -> int:
        return len(self.keys())
