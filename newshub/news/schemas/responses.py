"""News API response schemas"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict

from ..sources.base import FetchStrategy


# ============================================================================
# Catalog
# ============================================================================

class LanguageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    native_name: str


class SourceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    language: str
    feed_url: str
    strategy: FetchStrategy


class LanguageSourcesResponse(BaseModel):
    language: LanguageResponse
    sources: List[SourceResponse] = []


class SourcesResponse(BaseModel):
    success: bool = True
    data: Dict[str, LanguageSourcesResponse]


# ============================================================================
# News items
# ============================================================================

class NewsItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    guid: str
    source_id: str
    language: str
    title: str
    link: str
    description: str = ""
    content: str = ""
    published_at: datetime
    author: str = ""
    categories: List[str] = []
    image_url: Optional[str] = None


class NewsListResponse(BaseModel):
    success: bool = True
    data: List[NewsItemResponse]
    count: int
    source: str  # "cache" or "db"


# ============================================================================
# Refresh
# ============================================================================

class RefreshStartedResponse(BaseModel):
    success: bool = True
    message: str


class RefreshStatusResponse(BaseModel):
    success: bool = True
    in_flight: List[str] = []
    refresh_all_running: bool = False
    last_summary: Optional[Dict[str, Any]] = None
