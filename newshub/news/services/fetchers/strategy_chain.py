"""
Fetch strategy chain - picks and runs the retrieval strategies for one source

feed sources:   feed fetch
scrape sources: static HTML scrape -> headless browser scrape (only when the
                static attempt yields nothing)

fetch() never raises; every failure ends up as an empty list plus a log line
"""

from typing import Dict, List

import structlog

from ...sources.base import FetchStrategy, RawNewsRecord, SourceDescriptor
from ..scrapers.selector_extractor import SelectorExtractor
from .browser_fetcher import BrowserPageFetcher
from .feed_fetcher import FeedFetcher
from .static_fetcher import StaticPageFetcher

logger = structlog.get_logger(__name__)


class FetchStrategyChain:

    def __init__(
        self,
        feed_fetcher: FeedFetcher,
        static_fetcher: StaticPageFetcher,
        browser_fetcher: BrowserPageFetcher,
        extractors: Dict[str, SelectorExtractor],
    ):
        self.feed_fetcher = feed_fetcher
        self.static_fetcher = static_fetcher
        self.browser_fetcher = browser_fetcher
        self.extractors = extractors

    async def fetch(self, source: SourceDescriptor) -> List[RawNewsRecord]:
        try:
            if source.strategy == FetchStrategy.SCRAPE:
                return await self._scrape(source)
            return await self.feed_fetcher.fetch(source)
        except Exception as e:
            logger.error(
                "fetch_strategy_failed",
                source_id=source.id,
                strategy=source.strategy.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

    async def _scrape(self, source: SourceDescriptor) -> List[RawNewsRecord]:
        extractor = self.extractors.get(source.extractor_key)
        if extractor is None:
            logger.warning("scraper_rules_missing", source_id=source.id, scraper_key=source.extractor_key)
            return []

        markup = await self.static_fetcher.fetch_markup(source.feed_url, source_id=source.id)
        records = extractor.extract(markup)
        if records:
            logger.info("static_scrape_completed", source_id=source.id, items=len(records))
            return records

        logger.info(
            "static_scrape_empty_falling_back_to_browser",
            source_id=source.id,
            markup_received=markup is not None,
            rules_version=extractor.rules.version,
        )
        markup = await self.browser_fetcher.fetch_markup(
            source.feed_url,
            wait_for_selector=extractor.rules.wait_selector,
            source_id=source.id,
        )
        records = extractor.extract(markup)

        if records:
            logger.info("browser_scrape_completed", source_id=source.id, items=len(records))
        else:
            logger.warning("scrape_yielded_no_items", source_id=source.id, rules_version=extractor.rules.version)
        return records
