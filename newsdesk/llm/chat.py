"""Chat-model backed text generator."""

from __future__ import annotations

from typing import Any

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from newsdesk.config.settings import Settings
from newsdesk.llm.base import GenerationResult, TextGenerator
from newsdesk.models.research import Image, Source
from newsdesk.models.settings import NewsSettings

logger = structlog.get_logger(__name__)

# Chat models kept for per-run API overrides
MAX_OVERRIDE_MODELS = 8

RESEARCH_SYSTEM_PROMPT = (
    "You are a research assistant. Answer the search query with current, factual "
    "information and cite the sources you used."
)


def message_text(message: BaseMessage) -> str:
    """Flatten message content (string or content parts) to text."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


def parse_sources(metadata: dict[str, Any]) -> list[Source] | None:
    """Read cited sources from provider response metadata.

    Accepts ``search_results`` ([{title, url}]) or ``citations`` (URLs or
    dicts).
    """
    raw = metadata.get("search_results") or metadata.get("citations")
    if not raw:
        return None

    sources = []
    for item in raw:
        if isinstance(item, str):
            sources.append(Source(title=item, url=item))
        elif isinstance(item, dict) and item.get("url"):
            sources.append(Source(title=item.get("title") or item["url"], url=item["url"]))
    return sources


def parse_images(metadata: dict[str, Any]) -> list[Image] | None:
    """Read returned images from provider response metadata."""
    raw = metadata.get("images")
    if not raw:
        return None

    images = []
    for item in raw:
        if isinstance(item, str):
            images.append(Image(url=item))
        elif isinstance(item, dict):
            url = item.get("url") or item.get("image_url")
            if url:
                images.append(Image(url=url, alt=item.get("alt") or item.get("title") or ""))
    return images


class ChatTextGenerator(TextGenerator):
    """Text generator over a LangChain chat model."""

    def __init__(self, settings: Settings, llm: BaseChatModel | None = None):
        """
        Initialize generator.

        Args:
            settings: Application settings
            llm: Fixed chat model; when omitted models are built from settings
        """
        self.settings = settings
        self._llm = llm
        self._default_llm: BaseChatModel | None = None
        self._override_llms: dict[tuple, BaseChatModel] = {}

    def _model_for(self, news_settings: NewsSettings) -> BaseChatModel:
        if self._llm is not None:
            return self._llm

        from newsdesk.llm.factory import create_chat_model

        overrides = (
            news_settings.api_key,
            news_settings.api_endpoint,
            news_settings.model,
            news_settings.max_tokens,
            news_settings.temperature,
        )
        if all(value is None for value in overrides):
            if self._default_llm is None:
                self._default_llm = create_chat_model(
                    self.settings.generation_model,
                    self.settings,
                    max_tokens=self.settings.generation_max_tokens,
                    temperature=self.settings.generation_temperature,
                )
            return self._default_llm

        cached = self._override_llms.get(overrides)
        if cached is not None:
            return cached

        model_str = self.settings.generation_model
        if news_settings.model:
            provider = model_str.split(":", 1)[0] if ":" in model_str else "perplexity"
            model_str = news_settings.model if ":" in news_settings.model else f"{provider}:{news_settings.model}"

        llm = create_chat_model(
            model_str,
            self.settings,
            max_tokens=news_settings.max_tokens or self.settings.generation_max_tokens,
            temperature=(
                news_settings.temperature
                if news_settings.temperature is not None
                else self.settings.generation_temperature
            ),
            api_key=news_settings.api_key,
            base_url=news_settings.api_endpoint,
        )

        if len(self._override_llms) >= MAX_OVERRIDE_MODELS:
            # Oldest entry first
            self._override_llms.pop(next(iter(self._override_llms)))
        self._override_llms[overrides] = llm
        return llm

    async def generate(self, query: str, settings: NewsSettings) -> GenerationResult:
        llm = self._model_for(settings)
        response = await llm.ainvoke(
            [
                SystemMessage(content=RESEARCH_SYSTEM_PROMPT),
                HumanMessage(content=f"Search query: {query}"),
            ]
        )

        metadata = {**response.additional_kwargs, **response.response_metadata}
        content = message_text(response)

        logger.debug("Research query answered", query=query[:100], content_length=len(content))

        return GenerationResult(
            content=content or None,
            sources=parse_sources(metadata),
            images=parse_images(metadata),
        )

    async def complete(self, prompt: str, settings: NewsSettings, system_prompt: str | None = None) -> str:
        llm = self._model_for(settings)
        messages: list[BaseMessage] = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=prompt))

        response = await llm.ainvoke(messages)
        return message_text(response)
