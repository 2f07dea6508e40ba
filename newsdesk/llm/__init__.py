"""Text generation capability."""

from newsdesk.llm.base import GenerationResult, TextGenerator
from newsdesk.llm.chat import ChatTextGenerator
from newsdesk.llm.factory import create_chat_model, create_text_generator, provider_tag
from newsdesk.llm.mock import MockChatModel

__all__ = [
    "GenerationResult",
    "TextGenerator",
    "ChatTextGenerator",
    "MockChatModel",
    "create_chat_model",
    "create_text_generator",
    "provider_tag",
]
