from datetime import timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Index
from sqlalchemy.sql import func

from ...core.database import Base
from ..sources.base import NewsItem


class NewsArticle(Base):
    """
    Persisted news item. guid is the dedup key: ingestion upserts on it, so a
    re-fetched item overwrites its row instead of adding a new one.
    """
    __tablename__ = "news_items"

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Dedup key
    guid = Column(String(1000), nullable=False, unique=True)

    # Provenance (denormalized for query efficiency)
    source_id = Column(String(100), nullable=False)
    language = Column(String(20), nullable=False)

    # Core article info
    title = Column(String(1000), nullable=False)
    link = Column(String(2000), nullable=False)
    description = Column(Text)
    content = Column(Text)

    # Enrichment
    author = Column(String(500))
    categories = Column(JSON)
    image_url = Column(String(2000))

    # Timestamps
    published_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=func.now())
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_news_items_source_published", "source_id", "published_at"),
        Index("idx_news_items_language_published", "language", "published_at"),
    )

    def __repr__(self):
        return f"<NewsArticle(guid='{self.guid[:50]}', source_id='{self.source_id}')>"

    def apply(self, item: NewsItem) -> None:
        """Overwrite every ingested field with the item's values"""
        self.guid = item.guid
        self.source_id = item.source_id
        self.language = item.language
        self.title = item.title
        self.link = item.link
        self.description = item.description
        self.content = item.content
        self.author = item.author
        self.categories = list(item.categories)
        self.image_url = item.image_url
        self.published_at = item.published_at

    def to_news_item(self) -> NewsItem:
        published_at = self.published_at
        # SQLite hands back naive datetimes
        if published_at is not None and published_at.tzinfo is None:
            published_at = published_at.replace(tzinfo=timezone.utc)

        return NewsItem(
            guid=self.guid,
            source_id=self.source_id,
            language=self.language,
            title=self.title,
            link=self.link,
            published_at=published_at,
            description=self.description or "",
            content=self.content or "",
            author=self.author or "",
            categories=list(self.categories or []),
            image_url=self.image_url,
        )
