"""
Read-only News Service for API endpoints
Reads go through the cache first and fall back to the repository; the cache is
an optimization only, so any cache failure is logged and ignored
"""

from typing import Any, Dict, List, Optional, Tuple

import structlog

from ...repositories.news_repository import NewsRepository
from ..sources.base import NewsItem, SourceDescriptor
from ..sources.catalog import SourceCatalog
from .news_cache import NewsCache, SOURCES_KEY, news_key

logger = structlog.get_logger(__name__)

CACHE = "cache"
DB = "db"


class NewsService:

    def __init__(
        self,
        repository: NewsRepository,
        cache: NewsCache,
        catalog: SourceCatalog,
        sources_ttl_seconds: int = 3600,
    ):
        self.repository = repository
        self.cache = cache
        self.catalog = catalog
        self.sources_ttl_seconds = sources_ttl_seconds

    def get_cached_news(self, source_id: str, limit: int = 50) -> Tuple[List[NewsItem], str]:
        """Latest items of one source, newest first. Returns (items, origin)"""
        key = news_key(source_id=source_id, limit=limit)
        return self._read_through(key, lambda: self.repository.find_by_source(source_id, limit))

    def get_news_by_language(self, language: str, limit: int = 50) -> Tuple[List[NewsItem], str]:
        """Latest items across all sources of a language, newest first. Returns (items, origin)"""
        key = news_key(language=language, limit=limit)
        return self._read_through(key, lambda: self.repository.find_by_language(language, limit))

    def get_sources(self) -> Dict[str, Dict[str, Any]]:
        cached = self._cache_get(SOURCES_KEY)
        if cached is not None:
            return cached

        snapshot = self.catalog.snapshot()
        self._cache_set(SOURCES_KEY, snapshot, ttl=self.sources_ttl_seconds)
        return snapshot

    def find_source_by_id(self, source_id: str) -> Optional[SourceDescriptor]:
        return self.catalog.find_source_by_id(source_id)

    def _read_through(self, key: str, loader) -> Tuple[List[NewsItem], str]:
        cached = self._cache_get(key)
        if cached is not None:
            return cached, CACHE

        items = loader()
        self._cache_set(key, items)
        return items, DB

    def _cache_get(self, key: str):
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning("news_cache_read_failed", key=key, error=str(e))
            return None

    def _cache_set(self, key: str, value, ttl: Optional[int] = None) -> None:
        try:
            self.cache.set(key, value, ttl=ttl)
        except Exception as e:
            logger.warning("news_cache_write_failed", key=key, error=str(e))
