"""Parsing and scoring of generated news articles."""

import json
import re
from datetime import datetime, timezone
from typing import Any

import structlog

from newsdesk.models.news import DEFAULT_IMAGE_URL, NewsArticle
from newsdesk.models.research import utc_now_iso
from newsdesk.models.settings import NewsSettings

logger = structlog.get_logger(__name__)

BASE_RELEVANCE_SCORE = 70
TRUSTED_SOURCE_BONUS = 10
KEYWORD_BONUS = 5

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def calculate_relevance_score(article: dict[str, Any], settings: NewsSettings) -> float:
    """Score an article dict: base 70, +10 trusted source, +5 per keyword, clamped to 0..100."""
    score = BASE_RELEVANCE_SCORE

    if article.get("source") in settings.trusted_sources:
        score += TRUSTED_SOURCE_BONUS

    text = f"{article.get('title', '')} {article.get('summary', '')} {article.get('content', '')}".lower()
    score += KEYWORD_BONUS * sum(1 for keyword in settings.keywords if keyword.lower() in text)

    return min(max(score, 0), 100)


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    match = _FENCED_BLOCK.search(text)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            return None
    return None


def parse_generated_articles(text: str, settings: NewsSettings) -> list[NewsArticle]:
    """
    Parse generated text into news articles.

    The text must be a JSON array of article objects, optionally wrapped in a
    fenced code block. Anything else yields an empty list.
    """
    data = _load_json(text.strip()) if text else None
    if not isinstance(data, list):
        logger.warning("Generated news is not a JSON array", preview=(text or "")[:200])
        return []

    scraped_at = utc_now_iso()
    articles = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            continue
        tags = item.get("tags")
        articles.append(
            NewsArticle(
                id=str(item.get("id") or f"generated-{index}"),
                title=item.get("title") or "Untitled Article",
                summary=item.get("summary") or "",
                content=item.get("content") or "",
                url=item.get("url") or "",
                source=item.get("source") or "Unknown Source",
                source_url=item.get("sourceUrl") or "",
                image_url=item.get("imageUrl") or DEFAULT_IMAGE_URL,
                relevance_score=calculate_relevance_score(item, settings),
                published_at=item.get("publishedAt") or utc_now_iso(),
                scraped_at=scraped_at,
                category=item.get("category") or "Uncategorized",
                tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
                suggestion=item.get("suggestion") or "",
                is_bookmarked=False,
            )
        )
    return articles


def parse_published(value: str) -> datetime:
    """Parse an ISO timestamp as an aware datetime; unparseable values sort oldest."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
