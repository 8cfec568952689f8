"""Process-local key-value store with per-key expiration

Mirrors the subset of Redis semantics the shortlink DAOs rely on (INCR, GET,
SET with EX, TTL, EXISTS). Expired keys behave exactly like missing keys and
are dropped lazily on access. Time is read from datetime.now(UTC), so tests
can move it with freezegun.

Intended for unit tests and local experiments, never for production: the data
lives and dies with the process.
"""

import threading
from datetime import datetime, timedelta, UTC


class InMemoryStore:
    def __init__(self):
        self._data: dict[str, tuple[str, datetime | None]] = {}
        self._lock = threading.Lock()

    def _live(self, key: str) -> tuple[str, datetime | None] | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and expires_at <= datetime.now(UTC):
            del self._data[key]
            return None
        return entry

    def incr(self, key: str) -> int:
        with self._lock:
            entry = self._live(key)
            value = int(entry[0]) + 1 if entry else 1
            self._data[key] = (str(value), entry[1] if entry else None)
            return value

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._live(key)
            return entry[0] if entry else None

    def set(self, key: str, value: str, ex: int | None = None) -> bool:
        with self._lock:
            expires_at = datetime.now(UTC) + timedelta(seconds=ex) if ex is not None else None
            self._data[key] = (str(value), expires_at)
            return True

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._live(key) is not None

    def ttl(self, key: str) -> int:
        """Remaining seconds, -1 for keys without expiration, -2 for missing keys (as Redis TTL)"""
        with self._lock:
            entry = self._live(key)
            if entry is None:
                return -2
            _, expires_at = entry
            if expires_at is None:
                return -1
            return int((expires_at - datetime.now(UTC)).total_seconds())
