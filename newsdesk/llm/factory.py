"""LLM factory for the text generation capability."""

from __future__ import annotations

import structlog
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from newsdesk.config.settings import Settings
from newsdesk.llm.base import TextGenerator
from newsdesk.llm.chat import ChatTextGenerator
from newsdesk.llm.mock import MockChatModel
from newsdesk.models.settings import Provider

logger = structlog.get_logger(__name__)


def split_model_string(model_str: str) -> tuple[str, str]:
    """Split ``provider:model``; bare model names default to perplexity."""
    if ":" in model_str:
        provider, model_name = model_str.split(":", 1)
        return provider.lower(), model_name
    return "perplexity", model_str


def provider_tag(model_str: str) -> Provider:
    """Provider label recorded in prompt logs."""
    provider, _ = split_model_string(model_str)
    if provider in {"anthropic", "claude"}:
        return "anthropic"
    if provider == "openai":
        return "openai"
    return "perplexity"


def create_chat_model(
    model_str: str,
    settings: Settings,
    max_tokens: int,
    temperature: float = 0.7,
    api_key: str | None = None,
    base_url: str | None = None,
) -> BaseChatModel:
    """Create a chat model from provider:model string.

    ``api_key`` and ``base_url`` override the configured credentials, which is
    how per-run dashboard settings reach the provider.
    """
    if settings.mock_mode or model_str.startswith("mock"):
        logger.info("using_mock_llm")
        return MockChatModel()

    provider, model_name = split_model_string(model_str)

    if provider == "perplexity":
        key = api_key or settings.generation_api_key
        if not key:
            raise ValueError("Generation API key not configured")

        logger.debug("creating_perplexity_model", model=model_name)
        return ChatOpenAI(
            model=model_name,
            api_key=key,
            base_url=base_url or settings.generation_api_base,
            max_tokens=max_tokens,
            temperature=temperature,
        )

    if provider == "openai":
        key = api_key or settings.openai_api_key
        if not key:
            raise ValueError("OpenAI API key not configured")

        llm_kwargs = {
            "model": model_name,
            "api_key": key,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if base_url or settings.openai_base_url:
            llm_kwargs["base_url"] = base_url or settings.openai_base_url

        logger.debug("creating_openai_model", model=model_name)
        return ChatOpenAI(**llm_kwargs)

    if provider in {"anthropic", "claude"}:
        key = api_key or settings.anthropic_api_key
        if not key:
            raise ValueError("Anthropic API key not configured")

        logger.debug("creating_anthropic_model", model=model_name)
        return ChatAnthropic(
            model=model_name,
            api_key=key,
            max_tokens=max_tokens,
            temperature=temperature,
        )

    raise ValueError(f"Unsupported LLM provider: {provider}")


def create_text_generator(settings: Settings) -> TextGenerator:
    """Create the text generation capability for the configured mode."""
    if settings.mock_mode:
        logger.info("Creating mock text generator")
        return ChatTextGenerator(settings=settings, llm=MockChatModel())

    logger.info("Creating chat text generator", model=settings.generation_model)
    return ChatTextGenerator(settings=settings)
