"""
News Refresh Service
Drives ingestion for one source or for the whole catalog:
1. Resolve sources from the catalog
2. Run the fetch strategy chain
3. Normalize and upsert into the repository
4. Invalidate the affected read-through cache entries

A full refresh runs at most max_concurrency sources at a time and isolates
every source's failure; it always completes. Overlapping refreshes of the same
source share one in-flight task instead of fetching twice.
"""

import asyncio
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set

import structlog

from ...exceptions import PersistenceError
from ...repositories.news_repository import NewsRepository
from ..sources.base import SourceDescriptor
from ..sources.catalog import SourceCatalog
from .fetchers.strategy_chain import FetchStrategyChain
from .news_cache import NewsCache
from .normalizer import NewsNormalizer

logger = structlog.get_logger(__name__)


@dataclass
class RefreshSummary:
    """Outcome of one full refresh cycle"""
    started_at: datetime
    total_sources: int = 0
    succeeded: int = 0
    items_saved: int = 0
    empty_sources: List[str] = field(default_factory=list)
    failed_sources: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def failed(self) -> int:
        # An empty result is indistinguishable from an outage, so it counts as a failure
        return len(self.failed_sources) + len(self.empty_sources)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        data["failed"] = self.failed
        return data


class NewsRefreshService:

    def __init__(
        self,
        catalog: SourceCatalog,
        fetch_chain: FetchStrategyChain,
        repository: NewsRepository,
        cache: NewsCache,
        normalizer: Optional[NewsNormalizer] = None,
        max_concurrency: int = 5,
    ):
        self.catalog = catalog
        self.fetch_chain = fetch_chain
        self.repository = repository
        self.cache = cache
        self.normalizer = normalizer or NewsNormalizer()
        self.max_concurrency = max_concurrency

        self._in_flight: Dict[str, asyncio.Task] = {}
        self._background_tasks: Set[asyncio.Task] = set()
        self._global_task: Optional[asyncio.Task] = None
        self.last_summary: Optional[RefreshSummary] = None

    async def refresh_source(self, source_id: str) -> int:
        """
        Fetch, normalize and persist one source, then drop its cached queries.

        Raises:
            SourceNotFoundError: source_id is not in the catalog
            PersistenceError: the batch could not be written

        Returns:
            Number of items persisted
        """
        source = self.catalog.get_source(source_id)
        saved = await self._refresh_once(source)
        self._invalidate_source_scope(source)
        return saved

    async def refresh_all(self) -> RefreshSummary:
        sources = self.catalog.all_sources()
        summary = RefreshSummary(started_at=datetime.now(timezone.utc), total_sources=len(sources))
        semaphore = asyncio.Semaphore(self.max_concurrency)
        started = time.monotonic()

        logger.info("refresh_all_started", sources=len(sources), max_concurrency=self.max_concurrency)

        async def run(source: SourceDescriptor) -> None:
            async with semaphore:
                try:
                    saved = await self._refresh_once(source)
                except Exception as e:
                    summary.failed_sources.append(source.id)
                    logger.error(
                        "source_refresh_failed",
                        source_id=source.id,
                        error=str(e),
                        error_type=type(e).__name__
                    )
                    return

            if saved:
                summary.succeeded += 1
                summary.items_saved += saved
            else:
                summary.empty_sources.append(source.id)

        await asyncio.gather(*(run(source) for source in sources))

        self._flush_cache()
        summary.duration_seconds = round(time.monotonic() - started, 3)
        self.last_summary = summary

        logger.info(
            "refresh_all_completed",
            total=summary.total_sources,
            succeeded=summary.succeeded,
            failed=summary.failed,
            items_saved=summary.items_saved,
            duration_seconds=summary.duration_seconds,
        )
        return summary

    def start_refresh(self, source_id: Optional[str] = None) -> asyncio.Task:
        """
        Kick off a refresh in the background and hand back its task right away.

        An unknown source_id raises SourceNotFoundError before anything is
        scheduled. Must be called from inside a running event loop.
        """
        if source_id is None:
            if self._global_task is not None and not self._global_task.done():
                logger.info("refresh_all_already_running")
                return self._global_task
            task = asyncio.create_task(self.refresh_all(), name="refresh:all")
            self._global_task = task
        else:
            self.catalog.get_source(source_id)
            task = asyncio.create_task(self.refresh_source(source_id), name=f"refresh:{source_id}")

        self._background_tasks.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    def status(self) -> Dict[str, Any]:
        return {
            "in_flight": sorted(self._in_flight),
            "refresh_all_running": self._global_task is not None and not self._global_task.done(),
            "last_summary": self.last_summary.to_dict() if self.last_summary else None,
        }

    async def _refresh_once(self, source: SourceDescriptor) -> int:
        task = self._in_flight.get(source.id)
        if task is None or task.done():
            task = asyncio.create_task(self._ingest(source), name=f"ingest:{source.id}")
            self._in_flight[source.id] = task
            task.add_done_callback(lambda finished: self._forget_in_flight(source.id, finished))
        else:
            logger.info("source_refresh_joined_in_flight", source_id=source.id)

        # shield: one caller giving up must not cancel the fetch for the others
        return await asyncio.shield(task)

    async def _ingest(self, source: SourceDescriptor) -> int:
        started = time.monotonic()
        records = await self.fetch_chain.fetch(source)
        items = self.normalizer.normalize_all(records, source.id, source.language)

        try:
            saved = await asyncio.to_thread(self.repository.save, items)
        except Exception as e:
            logger.error("source_persist_failed", source_id=source.id, items=len(items), error=str(e))
            raise PersistenceError(
                f"Failed to persist items for {source.id}",
                details={"source_id": source.id, "items": len(items)}
            ) from e

        logger.info(
            "source_refreshed",
            source_id=source.id,
            strategy=source.strategy.value,
            fetched=len(records),
            saved=saved,
            duration_seconds=round(time.monotonic() - started, 3),
        )
        return saved

    def _forget_in_flight(self, source_id: str, task: asyncio.Task) -> None:
        if self._in_flight.get(source_id) is task:
            del self._in_flight[source_id]

    def _invalidate_source_scope(self, source: SourceDescriptor) -> None:
        try:
            self.cache.invalidate_scope(source.id, source.language)
        except Exception as e:
            logger.warning("news_cache_invalidation_failed", source_id=source.id, error=str(e))

    def _flush_cache(self) -> None:
        try:
            self.cache.flush()
        except Exception as e:
            logger.warning("news_cache_flush_failed", error=str(e))

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            logger.warning("background_refresh_cancelled", task=task.get_name())
            return

        error = task.exception()
        if error is not None:
            logger.error("background_refresh_failed", task=task.get_name(), error=str(error))
        else:
            logger.info("background_refresh_finished", task=task.get_name())
