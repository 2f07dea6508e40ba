"""SQLite database schema for prompt logs."""

from typing import Any

from sqlalchemy import Column, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class PromptLogModel(Base):
    """Prompt enhancement audit record."""

    __tablename__ = "prompt_logs"

    id = Column(String(64), primary_key=True)
    timestamp = Column(String, nullable=False)  # ISO timestamp
    original_prompt = Column(Text, nullable=False)
    enhanced_prompt = Column(Text, nullable=False)
    provider = Column(String(32), nullable=False, default="perplexity")
    article_count = Column(Integer, nullable=False, default=0)
    status = Column(String(16), nullable=False, default="success")
    error_message = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_prompt_logs_timestamp", "timestamp"),
        Index("idx_prompt_logs_provider", "provider"),
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "original_prompt": self.original_prompt,
            "enhanced_prompt": self.enhanced_prompt,
            "provider": self.provider,
            "article_count": self.article_count,
            "status": self.status,
            "error_message": self.error_message,
        }
