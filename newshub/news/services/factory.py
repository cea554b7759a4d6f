"""
Wires the ingestion pipeline together once at process start
"""

from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...config import Settings
from ...repositories.news_repository import NewsRepository
from ..sources.catalog import SourceCatalog
from .fetchers.browser_fetcher import BrowserPageFetcher
from .fetchers.feed_fetcher import FeedFetcher
from .fetchers.static_fetcher import StaticPageFetcher
from .fetchers.strategy_chain import FetchStrategyChain
from .news_cache import NewsCache
from .news_service import NewsService
from .refresh_scheduler import RefreshScheduler
from .refresh_service import NewsRefreshService
from .scrapers.site_rules import build_extractors


@dataclass
class NewsHub:
    catalog: SourceCatalog
    cache: NewsCache
    repository: NewsRepository
    news_service: NewsService
    refresh_service: NewsRefreshService
    scheduler: RefreshScheduler


def build_fetch_chain(settings: Settings) -> FetchStrategyChain:
    return FetchStrategyChain(
        feed_fetcher=FeedFetcher(
            user_agent=settings.feed_user_agent,
            timeout_seconds=settings.feed_timeout_seconds,
        ),
        static_fetcher=StaticPageFetcher(
            user_agent=settings.browser_user_agent,
            timeout_seconds=settings.static_fetch_timeout_seconds,
        ),
        browser_fetcher=BrowserPageFetcher(
            user_agent=settings.browser_user_agent,
            navigation_timeout_seconds=settings.browser_navigation_timeout_seconds,
            selector_wait_seconds=settings.browser_selector_wait_seconds,
            executable_path=settings.browser_executable_path,
        ),
        extractors=build_extractors(),
    )


def create_news_hub(
    settings: Settings,
    session_factory: Callable[[], Session],
    catalog: Optional[SourceCatalog] = None,
    fetch_chain: Optional[FetchStrategyChain] = None,
) -> NewsHub:
    catalog = catalog or SourceCatalog()
    cache = NewsCache(default_ttl_seconds=settings.news_cache_ttl_seconds)
    repository = NewsRepository(session_factory)

    refresh_service = NewsRefreshService(
        catalog=catalog,
        fetch_chain=fetch_chain or build_fetch_chain(settings),
        repository=repository,
        cache=cache,
        max_concurrency=settings.max_concurrent_refreshes,
    )

    return NewsHub(
        catalog=catalog,
        cache=cache,
        repository=repository,
        news_service=NewsService(
            repository=repository,
            cache=cache,
            catalog=catalog,
            sources_ttl_seconds=settings.sources_cache_ttl_seconds,
        ),
        refresh_service=refresh_service,
        scheduler=RefreshScheduler(
            refresh_service,
            interval_seconds=settings.refresh_interval_minutes * 60,
            run_on_start=settings.refresh_on_startup,
        ),
    )
