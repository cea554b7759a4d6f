from fastapi import Request

from ..news.services.factory import NewsHub
from ..news.services.news_service import NewsService
from ..news.services.refresh_service import NewsRefreshService


def get_news_hub(request: Request) -> NewsHub:
    return request.app.state.news_hub


def get_news_service(request: Request) -> NewsService:
    return get_news_hub(request).news_service


def get_refresh_service(request: Request) -> NewsRefreshService:
    return get_news_hub(request).refresh_service
