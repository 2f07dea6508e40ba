"""Prompt log store interface."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from newsdesk.models.settings import PromptLog, Provider


def retention_cutoff(retention_days: int) -> str:
    """ISO timestamp before which logs are expired."""
    return (datetime.now(timezone.utc) - timedelta(days=retention_days)).isoformat()


class PromptLogStore(ABC):
    """Abstract audit trail of prompt enhancements."""

    @abstractmethod
    async def save(self, log: PromptLog) -> None:
        """Persist a prompt log."""
        pass

    @abstractmethod
    async def list_logs(self, limit: int = 50, provider: Provider | None = None) -> list[PromptLog]:
        """
        Get recent prompt logs.

        Args:
            limit: Maximum number of logs
            provider: Only logs for this provider

        Returns:
            Logs ordered newest first
        """
        pass

    @abstractmethod
    async def update_article_count(self, log_id: str, article_count: int) -> None:
        """Record how many articles a logged prompt produced."""
        pass

    @abstractmethod
    async def delete_older_than(self, retention_days: int = 30) -> int:
        """
        Delete logs older than the retention window.

        Returns:
            Number of deleted logs
        """
        pass

    @abstractmethod
    async def search(self, term: str, limit: int = 50) -> list[PromptLog]:
        """Case-insensitive search over original and enhanced prompts, newest first."""
        pass

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check the store is reachable."""
        pass
