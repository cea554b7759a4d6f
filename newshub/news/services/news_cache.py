"""
In-process TTL cache for news query results and the source catalog snapshot

Keys are ':'-joined segments (see news_key / SOURCES_KEY) so a refresh can
drop every cached query shape that mentions a source id or language.
"""

import time
from typing import Any, Callable, Dict, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)

SOURCES_KEY = "sources:all"
KEY_SEPARATOR = ":"
ALL = "all"


def news_key(source_id: Optional[str] = None, language: Optional[str] = None, limit: int = 50) -> str:
    return KEY_SEPARATOR.join(["news", source_id or ALL, language or ALL, str(limit)])


class NewsCache:

    def __init__(self, default_ttl_seconds: int = 300, clock: Callable[[], float] = time.monotonic):
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self.stats = {"hits": 0, "misses": 0, "evictions": 0}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self.stats["misses"] += 1
            return None

        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            self.stats["misses"] += 1
            return None

        self.stats["hits"] += 1
        return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl_seconds = self.default_ttl_seconds if ttl is None else ttl
        self._entries[key] = (value, self._clock() + ttl_seconds)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def keys(self):
        return list(self._entries.keys())

    def invalidate(self, predicate: Callable[[str], bool]) -> int:
        doomed = [key for key in self._entries if predicate(key)]
        for key in doomed:
            del self._entries[key]
        self.stats["evictions"] += len(doomed)
        return len(doomed)

    def invalidate_scope(self, *tags: str) -> int:
        """Drop every key that has one of the tags as a segment"""
        wanted = {tag for tag in tags if tag}
        if not wanted:
            return 0
        removed = self.invalidate(lambda key: not wanted.isdisjoint(key.split(KEY_SEPARATOR)))
        logger.info("news_cache_scope_invalidated", tags=sorted(wanted), removed=removed)
        return removed

    def flush(self) -> None:
        removed = len(self._entries)
        self._entries.clear()
        self.stats["evictions"] += removed
        logger.info("news_cache_flushed", removed=removed)

    def __len__(self) -> int:
        return len(self._entries)
