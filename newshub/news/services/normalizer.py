"""
Normalizer - converts raw fetched records into canonical NewsItems
Total function: every field is defaulted or sanitized on its own, nothing raises
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..sources.base import NewsItem, RawNewsRecord
from .content_cleaner import ContentCleaner

DEFAULT_TITLE = "No Title"


class NewsNormalizer:

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def normalize(self, raw: RawNewsRecord, source_id: str, language: str) -> NewsItem:
        link = (raw.link or "").strip()
        title = ContentCleaner.normalize_whitespace(ContentCleaner.strip_tags(raw.title)) or DEFAULT_TITLE

        description_html = raw.description or raw.content or ""
        content_html = raw.content or raw.description or ""

        return NewsItem(
            guid=self._derive_guid(raw, link),
            source_id=source_id,
            language=language,
            title=title,
            link=link,
            published_at=self._published_at(raw.published_at),
            description=ContentCleaner.sanitize_html(description_html),
            content=ContentCleaner.sanitize_html(content_html),
            author=ContentCleaner.normalize_whitespace(raw.author),
            categories=self._categories(raw.categories),
            image_url=raw.image_url or ContentCleaner.extract_first_image(content_html, base_url=link or None),
        )

    def normalize_all(self, records: List[RawNewsRecord], source_id: str, language: str) -> List[NewsItem]:
        return [self.normalize(record, source_id, language) for record in records]

    @staticmethod
    def _derive_guid(raw: RawNewsRecord, link: str) -> str:
        guid = (raw.guid or "").strip()
        return guid or link

    def _published_at(self, value: Optional[datetime]) -> datetime:
        if value is None:
            return self._clock()
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @staticmethod
    def _categories(values: Optional[List[str]]) -> List[str]:
        if not values:
            return []
        seen = []
        for value in values:
            cleaned = ContentCleaner.normalize_whitespace(value) if isinstance(value, str) else ""
            if cleaned and cleaned not in seen:
                seen.append(cleaned)
        return seen
