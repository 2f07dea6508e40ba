"""In-memory prompt log store."""

from newsdesk.models.settings import PromptLog, Provider
from newsdesk.prompt_logs.base import PromptLogStore, retention_cutoff


class InMemoryPromptLogStore(PromptLogStore):
    """Prompt logs kept in process memory (mock mode and tests)."""

    def __init__(self):
        self.logs: dict[str, PromptLog] = {}

    def _newest_first(self, logs: list[PromptLog]) -> list[PromptLog]:
        return sorted(logs, key=lambda log: log.timestamp, reverse=True)

    async def save(self, log: PromptLog) -> None:
        self.logs[log.id] = log

    async def list_logs(self, limit: int = 50, provider: Provider | None = None) -> list[PromptLog]:
        logs = [log for log in self.logs.values() if provider is None or log.provider == provider]
        return self._newest_first(logs)[:limit]

    async def update_article_count(self, log_id: str, article_count: int) -> None:
        log = self.logs.get(log_id)
        if log is not None:
            self.logs[log_id] = log.model_copy(update={"article_count": article_count})

    async def delete_older_than(self, retention_days: int = 30) -> int:
        cutoff = retention_cutoff(retention_days)
        expired = [log_id for log_id, log in self.logs.items() if log.timestamp < cutoff]
        for log_id in expired:
            del self.logs[log_id]
        return len(expired)

    async def search(self, term: str, limit: int = 50) -> list[PromptLog]:
        needle = term.lower()
        logs = [
            log
            for log in self.logs.values()
            if needle in log.original_prompt.lower() or needle in log.enhanced_prompt.lower()
        ]
        return self._newest_first(logs)[:limit]

    async def check_connection(self) -> bool:
        return True
