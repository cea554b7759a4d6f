"""
Core data types shared by the ingestion pipeline
Source descriptors come from the catalog, raw records come out of a fetch
strategy and NewsItem is the canonical, normalized shape that gets persisted
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class FetchStrategy(str, Enum):
    FEED = "feed"
    SCRAPE = "scrape"


@dataclass(frozen=True)
class Language:
    """A language tag the catalog groups sources under"""
    id: str
    name: str
    native_name: str


@dataclass(frozen=True)
class SourceDescriptor:
    """Immutable description of one upstream news source"""
    id: str
    name: str
    language: str
    feed_url: str
    strategy: FetchStrategy = FetchStrategy.FEED
    scraper_key: Optional[str] = None

    @property
    def extractor_key(self) -> str:
        return self.scraper_key or self.id


@dataclass
class RawNewsRecord:
    """Strategy-specific record; only lives for the duration of one fetch"""
    title: Optional[str]
    link: Optional[str]
    description: Optional[str] = None
    content: Optional[str] = None
    published_at: Optional[datetime] = None
    guid: Optional[str] = None
    author: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    image_url: Optional[str] = None


@dataclass
class NewsItem:
    """Standardized news item format for all sources"""
    guid: str
    source_id: str
    language: str
    title: str
    link: str
    published_at: datetime
    description: str = ""
    content: str = ""
    author: str = ""
    categories: List[str] = field(default_factory=list)
    image_url: Optional[str] = None
