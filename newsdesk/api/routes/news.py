"""News feed endpoint."""

import structlog
from fastapi import APIRouter, HTTPException, Request

from newsdesk.api.models.news import NewsRequest, NewsResponse
from newsdesk.news.service import NewsService

router = APIRouter(prefix="/api", tags=["news"])
logger = structlog.get_logger(__name__)


@router.post("/news", response_model=NewsResponse)
async def refresh_news(news_request: NewsRequest, request: Request) -> NewsResponse:
    """Fetch fresh news for the settings and build the daily summary."""
    news_service: NewsService = request.app.state.news_service

    try:
        articles, daily_summary = await news_service.refresh_news(news_request.settings, news_request.filter)
    except Exception as e:
        logger.error("News refresh failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=502, detail=f"News generation failed: {e}")

    return NewsResponse(articles=articles, daily_summary=daily_summary)
