"""In-memory TTL cache for upstream feed payloads."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

DEFAULT_TTL = timedelta(hours=24)


@dataclass
class CacheEntry:
    """One cached payload. ``payload`` is raw text or decoded JSON."""
    key: str
    payload: Any
    timestamp: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.timestamp


class TTLCache:
    """
    Process-wide payload cache keyed by request URL (or ``paper_<id>``).

    An entry is served strictly less than ``ttl`` after it was stored;
    after that it is dropped and the caller refetches. There is no size
    bound and concurrent writers to the same key simply overwrite each
    other.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the live entry for ``key``, or None if absent/expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.age(self._clock()) >= self.ttl:
            self._entries.pop(key, None)
            return None
        return entry

    def put(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(key=key, payload=payload, timestamp=self._clock())
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
