"""
RSS/Atom feed fetcher
Downloads the feed with httpx and parses it with feedparser; any transport or
parse failure degrades to an empty list
"""

import calendar
from datetime import datetime, timezone
from typing import List, Optional

import feedparser
import httpx
import structlog

from ...sources.base import RawNewsRecord, SourceDescriptor
from ....exceptions import NetworkError, ParsingError

logger = structlog.get_logger(__name__)

FEED_ACCEPT = "application/rss+xml, application/atom+xml, application/xml;q=0.9, text/xml;q=0.8, */*;q=0.5"


class FeedFetcher:

    def __init__(self, user_agent: str, timeout_seconds: float = 10.0):
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds

    async def fetch(self, source: SourceDescriptor) -> List[RawNewsRecord]:
        try:
            logger.info("feed_fetch_started", source_id=source.id, url=source.feed_url)
            payload = await self._download(source.feed_url)
            records = self.parse(payload)
            logger.info("feed_fetch_completed", source_id=source.id, items=len(records))
            return records
        except NetworkError as e:
            logger.error("feed_fetch_failed", source_id=source.id, url=source.feed_url, **e.details, error=e.message)
        except ParsingError as e:
            logger.error("feed_parse_failed", source_id=source.id, url=source.feed_url, error=e.message)
        return []

    async def _download(self, url: str) -> bytes:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": FEED_ACCEPT,
            "Accept-Language": "en-US,en;q=0.9",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
                return response.content
        except httpx.TimeoutException:
            raise NetworkError("Request timed out", details={"status": "timeout"})
        except httpx.HTTPStatusError as e:
            raise NetworkError(f"HTTP {e.response.status_code}", details={"status": e.response.status_code})
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or e.__class__.__name__, details={"status": "network_error"})

    def parse(self, payload: bytes) -> List[RawNewsRecord]:
        feed = feedparser.parse(payload)

        if feed.bozo and not feed.entries:
            raise ParsingError(f"Unparseable feed: {feed.get('bozo_exception')}")
        if feed.bozo:
            logger.warning("feed_parse_degraded", error=str(feed.get("bozo_exception")))

        return [self._parse_entry(entry) for entry in feed.entries]

    def _parse_entry(self, entry) -> RawNewsRecord:
        content = None
        if entry.get("content"):
            content = entry["content"][0].get("value")

        return RawNewsRecord(
            title=entry.get("title"),
            link=entry.get("link"),
            description=entry.get("summary") or entry.get("description"),
            content=content,
            published_at=self._parse_date(entry),
            guid=entry.get("id") or entry.get("guid"),
            author=entry.get("author") or entry.get("dc_creator"),
            categories=[tag.get("term") for tag in entry.get("tags", []) if tag.get("term")],
            image_url=self._extract_image(entry),
        )

    @staticmethod
    def _parse_date(entry) -> Optional[datetime]:
        for key in ("published_parsed", "updated_parsed", "created_parsed"):
            parsed = entry.get(key)
            if parsed:
                try:
                    # feedparser normalizes struct_time values to UTC
                    return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
                except (TypeError, ValueError, OverflowError):
                    continue
        return None

    @staticmethod
    def _extract_image(entry) -> Optional[str]:
        for enclosure in entry.get("enclosures", []):
            href = enclosure.get("href") or enclosure.get("url")
            if href and enclosure.get("type", "image/").startswith("image/"):
                return href

        for media in entry.get("media_content", []):
            url = media.get("url")
            if url and (media.get("medium") == "image" or media.get("type", "image/").startswith("image/")):
                return url

        for thumbnail in entry.get("media_thumbnail", []):
            if thumbnail.get("url"):
                return thumbnail["url"]

        return None
