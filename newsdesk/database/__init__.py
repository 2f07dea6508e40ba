"""Relational storage for prompt logs."""

from newsdesk.database.connection import create_session_factory, create_sqlite_engine, create_tables
from newsdesk.database.schema import Base, PromptLogModel

__all__ = [
    "Base",
    "PromptLogModel",
    "create_session_factory",
    "create_sqlite_engine",
    "create_tables",
]
