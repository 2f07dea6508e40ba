"""SQLAlchemy-backed prompt log store."""

import structlog
from sqlalchemy import delete, or_, select, text, update
from sqlalchemy.ext.asyncio import async_sessionmaker

from newsdesk.database.schema import PromptLogModel
from newsdesk.models.settings import PromptLog, Provider
from newsdesk.prompt_logs.base import PromptLogStore, retention_cutoff

logger = structlog.get_logger(__name__)


def _to_record(row: PromptLogModel) -> PromptLog:
    return PromptLog(**row.to_dict())


class SQLPromptLogStore(PromptLogStore):
    """Prompt logs in the ``prompt_logs`` table."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def save(self, log: PromptLog) -> None:
        async with self.session_factory() as session:
            session.add(
                PromptLogModel(
                    id=log.id,
                    timestamp=log.timestamp,
                    original_prompt=log.original_prompt,
                    enhanced_prompt=log.enhanced_prompt,
                    provider=log.provider,
                    article_count=log.article_count,
                    status=log.status,
                    error_message=log.error_message,
                )
            )
            await session.commit()
        logger.debug("Prompt log saved", log_id=log.id)

    async def list_logs(self, limit: int = 50, provider: Provider | None = None) -> list[PromptLog]:
        stmt = select(PromptLogModel).order_by(PromptLogModel.timestamp.desc()).limit(limit)
        if provider:
            stmt = stmt.where(PromptLogModel.provider == provider)

        async with self.session_factory() as session:
            rows = (await session.execute(stmt)).scalars().all()
        return [_to_record(row) for row in rows]

    async def update_article_count(self, log_id: str, article_count: int) -> None:
        async with self.session_factory() as session:
            await session.execute(
                update(PromptLogModel).where(PromptLogModel.id == log_id).values(article_count=article_count)
            )
            await session.commit()

    async def delete_older_than(self, retention_days: int = 30) -> int:
        cutoff = retention_cutoff(retention_days)
        async with self.session_factory() as session:
            result = await session.execute(delete(PromptLogModel).where(PromptLogModel.timestamp < cutoff))
            await session.commit()

        deleted = result.rowcount or 0
        logger.info("Expired prompt logs deleted", retention_days=retention_days, deleted=deleted)
        return deleted

    async def search(self, term: str, limit: int = 50) -> list[PromptLog]:
        pattern = f"%{term}%"
        stmt = (
            select(PromptLogModel)
            .where(
                or_(
                    PromptLogModel.original_prompt.ilike(pattern),
                    PromptLogModel.enhanced_prompt.ilike(pattern),
                )
            )
            .order_by(PromptLogModel.timestamp.desc())
            .limit(limit)
        )
        async with self.session_factory() as session:
            rows = (await session.execute(stmt)).scalars().all()
        return [_to_record(row) for row in rows]

    async def check_connection(self) -> bool:
        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Prompt log store connection check failed", error=str(e))
            return False
