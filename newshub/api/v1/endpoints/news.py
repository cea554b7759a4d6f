from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from ....config import get_settings
from ....exceptions import SourceNotFoundError
from ....news.schemas.responses import (
    NewsItemResponse,
    NewsListResponse,
    RefreshStartedResponse,
    RefreshStatusResponse,
    SourcesResponse,
)
from ....news.services.news_service import NewsService
from ....news.services.refresh_service import NewsRefreshService
from ...dependencies import get_news_service, get_refresh_service

logger = structlog.get_logger(__name__)
settings = get_settings()

router = APIRouter()


@router.get("/sources", response_model=SourcesResponse)
async def get_sources(news_service: NewsService = Depends(get_news_service)):
    """Get all available sources grouped by language"""
    return SourcesResponse.model_validate({"data": news_service.get_sources()}, from_attributes=True)


@router.get("/news", response_model=NewsListResponse)
async def get_news(
    source_id: Optional[str] = Query(None, alias="sourceId", description="Filter by source id"),
    language: Optional[str] = Query(None, description="Filter by language code"),
    limit: int = Query(settings.default_news_limit, ge=1, le=settings.max_news_limit, description="Number of items"),
    news_service: NewsService = Depends(get_news_service)
):
    """Get the latest news for a source or for a whole language"""
    if source_id:
        items, origin = news_service.get_cached_news(source_id, limit)
    elif language:
        items, origin = news_service.get_news_by_language(language, limit)
    else:
        raise HTTPException(status_code=400, detail="Either sourceId or language parameter is required")

    data = [NewsItemResponse.model_validate(item) for item in items]
    return NewsListResponse(data=data, count=len(data), source=origin)


@router.post("/news/refresh", response_model=RefreshStartedResponse)
async def refresh_news(
    source_id: Optional[str] = Query(None, alias="sourceId", description="Source to refresh; all sources when omitted"),
    refresh_service: NewsRefreshService = Depends(get_refresh_service)
):
    """Start a background refresh; returns as soon as the work is scheduled"""
    try:
        refresh_service.start_refresh(source_id)
    except SourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    if source_id:
        logger.info("manual_refresh_started", source_id=source_id)
        return RefreshStartedResponse(message=f"Refresh started for {source_id}. Updates will appear shortly.")

    logger.info("manual_refresh_started", source_id="all")
    return RefreshStartedResponse(message="Refresh started for all sources. Updates will appear shortly.")


@router.get("/news/refresh/status", response_model=RefreshStatusResponse)
async def refresh_status(refresh_service: NewsRefreshService = Depends(get_refresh_service)):
    """In-flight sources and the outcome of the last full refresh"""
    return RefreshStatusResponse(**refresh_service.status())
