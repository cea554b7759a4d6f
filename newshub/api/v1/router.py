from fastapi import APIRouter

from .endpoints import health, news

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])

# Sources, news queries and refresh triggers - mounted at the API root
# (e.g. /api/v1/sources, /api/v1/news, /api/v1/news/refresh)
api_router.include_router(news.router, tags=["news"])
