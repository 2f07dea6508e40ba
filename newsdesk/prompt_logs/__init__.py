"""Prompt log capability."""

from newsdesk.prompt_logs.base import PromptLogStore
from newsdesk.prompt_logs.factory import create_prompt_log_store
from newsdesk.prompt_logs.memory import InMemoryPromptLogStore
from newsdesk.prompt_logs.sql import SQLPromptLogStore

__all__ = [
    "PromptLogStore",
    "InMemoryPromptLogStore",
    "SQLPromptLogStore",
    "create_prompt_log_store",
]
