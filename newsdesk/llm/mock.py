"""Mock chat model for offline runs."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, List, Optional
from urllib.parse import quote_plus

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult

MOCK_IMAGE_URL = "https://images.unsplash.com/photo-1551434678-e076c223a692"


class MockChatModel(BaseChatModel):
    """Minimal chat model that returns deterministic responses.

    Research queries carry citations and images in ``additional_kwargs`` the
    way search-augmented providers report them.
    """

    model_name: str = "mock"

    @property
    def _llm_type(self) -> str:
        return "mock-chat"

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        message = self._compose_response(messages)
        return ChatResult(generations=[ChatGeneration(message=message)])

    async def _agenerate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        return self._generate(messages, stop=stop, run_manager=run_manager, **kwargs)

    def _compose_response(self, messages: List[BaseMessage]) -> AIMessage:
        if not messages:
            return AIMessage(content="Mock response.")

        last_text = str(messages[-1].content)
        lower = last_text.lower()

        match = re.search(r"search query:\s*(.+)", last_text, re.IGNORECASE)
        if match:
            return self._research_answer(match.group(1).strip())

        if "research outline" in lower:
            return AIMessage(content=json.dumps(self._outline(last_text)))

        if "json array of news articles" in lower:
            return AIMessage(content=json.dumps(self._news_articles(last_text), indent=2))

        return AIMessage(content="Mock response based on provided context.")

    def _research_answer(self, query: str) -> AIMessage:
        slug = quote_plus(query)
        return AIMessage(
            content=(
                f"Research results for query: {query}. "
                "This would contain the actual research content from the search provider."
            ),
            additional_kwargs={
                "search_results": [
                    {"title": "Source 1", "url": f"https://example.com/{slug}/source1"},
                    {"title": "Source 2", "url": f"https://example.com/{slug}/source2"},
                ],
                "images": [{"url": MOCK_IMAGE_URL, "alt": f"Illustration for {query}"}],
            },
        )

    def _news_articles(self, prompt: str) -> list[dict]:
        company = self._extract_field(prompt, "Company Name") or "Your Company"
        industry = self._extract_field(prompt, "Industry") or "Technology"
        published = datetime.now(timezone.utc).replace(microsecond=0).isoformat()

        topics = [
            ("Market", f"{industry} market sees steady growth", "Market Watch"),
            ("Competitors", f"Competitors expand product lines in {industry}", "Industry Daily"),
            ("Regulation", f"New compliance rules proposed for {industry}", "Policy Journal"),
        ]

        articles = []
        for idx, (category, title, source) in enumerate(topics, start=1):
            articles.append(
                {
                    "title": title,
                    "summary": f"{title}. Relevant to {company}.",
                    "content": f"{title}. Analysts expect the change to affect {company} and its peers.",
                    "url": f"https://example.com/news/{idx}",
                    "source": source,
                    "sourceUrl": "https://example.com",
                    "imageUrl": MOCK_IMAGE_URL,
                    "publishedAt": published,
                    "category": category,
                    "tags": [industry.lower(), category.lower()],
                }
            )
        return articles

    def _outline(self, prompt: str) -> dict:
        company = self._extract_field(prompt, "Company Name") or "Your Company"
        return {
            "title": f"Research Plan for {company}",
            "sections": [
                {"title": "Industry Overview", "description": "Current state of the industry and major trends"},
                {"title": "Competitor Analysis", "description": "Recent developments from major competitors"},
                {"title": "Technology Innovations", "description": "New technologies relevant to the business"},
            ],
        }

    def _extract_field(self, text: str, label: str) -> str | None:
        match = re.search(rf"^\s*{re.escape(label)}:\s*(.+)$", text, re.IGNORECASE | re.MULTILINE)
        if match:
            return match.group(1).strip()
        return None
