from typing import Callable, Dict, List, Optional

import structlog
from sqlalchemy import desc, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..news.models.news_item import NewsArticle
from ..news.sources.base import NewsItem

logger = structlog.get_logger(__name__)


class NewsRepository:
    """
    Dedup-upsert store for news items.

    Every call opens its own session from the factory, so the repository can be
    shared by concurrent refreshes and used from worker threads.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def save(self, items: List[NewsItem]) -> int:
        """
        Upsert items by guid. Each item is committed on its own so one bad item
        never takes the rest of the batch down with it.

        Returns:
            Number of items written
        """
        if not items:
            return 0

        saved = 0
        session = self.session_factory()
        try:
            for item in items:
                if not item.guid:
                    logger.warning("news_item_skipped_missing_guid", source_id=item.source_id, title=item.title[:80])
                    continue
                try:
                    self._upsert(session, item)
                    session.commit()
                    saved += 1
                except SQLAlchemyError as e:
                    session.rollback()
                    logger.error(
                        "news_item_upsert_failed",
                        source_id=item.source_id,
                        guid=item.guid[:200],
                        error=str(e)
                    )
        finally:
            session.close()

        logger.info("news_items_saved", requested=len(items), saved=saved)
        return saved

    @staticmethod
    def _upsert(session: Session, item: NewsItem) -> NewsArticle:
        article = session.query(NewsArticle).filter(NewsArticle.guid == item.guid).first()
        if article is None:
            article = NewsArticle()
            session.add(article)
        article.apply(item)
        session.flush()
        return article

    def find_by_source(self, source_id: str, limit: int = 50) -> List[NewsItem]:
        with self.session_factory() as session:
            rows = session.query(NewsArticle).filter(
                NewsArticle.source_id == source_id
            ).order_by(desc(NewsArticle.published_at), desc(NewsArticle.id)).limit(limit).all()
            return [row.to_news_item() for row in rows]

    def find_by_language(self, language: str, limit: int = 50) -> List[NewsItem]:
        with self.session_factory() as session:
            rows = session.query(NewsArticle).filter(
                NewsArticle.language == language
            ).order_by(desc(NewsArticle.published_at), desc(NewsArticle.id)).limit(limit).all()
            return [row.to_news_item() for row in rows]

    def find_by_guid(self, guid: str) -> Optional[NewsItem]:
        with self.session_factory() as session:
            row = session.query(NewsArticle).filter(NewsArticle.guid == guid).first()
            return row.to_news_item() if row else None

    def count(self) -> int:
        with self.session_factory() as session:
            return session.query(func.count(NewsArticle.id)).scalar() or 0

    def count_by_source(self) -> Dict[str, int]:
        with self.session_factory() as session:
            rows = session.query(
                NewsArticle.source_id,
                func.count(NewsArticle.id)
            ).group_by(NewsArticle.source_id).all()
            return {source_id: count for source_id, count in rows}
