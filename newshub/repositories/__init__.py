from .news_repository import NewsRepository

__all__ = ["NewsRepository"]
