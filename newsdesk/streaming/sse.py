"""SSE streaming for pipeline runs."""

import asyncio
import json
import time
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class StreamEventType(str, Enum):
    """Types of events that can be streamed."""

    INIT = "init"
    PROGRESS = "progress"
    PLAN = "plan"
    TASKS = "tasks"
    ARTICLE = "article"
    ERROR = "error"
    DONE = "done"


class StreamingGenerator:
    """Base streaming generator with async queue."""

    def __init__(self):
        self.queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._finished = False

    def add(self, data: str) -> None:
        """Add data to stream."""
        if not self._finished:
            self.queue.put_nowait(data)

    def finish(self) -> None:
        """Signal stream completion."""
        if not self._finished:
            self._finished = True
            self.queue.put_nowait(None)

    async def stream(self):
        """Async generator for streaming data."""
        while True:
            data = await self.queue.get()
            if data is None:
                break
            yield data


class PipelineStreamingGenerator(StreamingGenerator):
    """Pipeline progress as structured SSE events."""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def _create_event(self, event_type: StreamEventType, data: Any) -> str:
        """Create SSE event with metadata."""
        event = {
            "run_id": self.run_id,
            "type": event_type.value,
            "timestamp": time.time(),
            "data": data,
        }
        return f"data: {json.dumps(event)}\n\n"

    def emit_init(self, company: str | None) -> None:
        self.add(self._create_event(StreamEventType.INIT, {"run_id": self.run_id, "company": company}))

    def emit_progress(self, stage: str, message: str) -> None:
        """Emit a stage/message notification."""
        self.add(self._create_event(StreamEventType.PROGRESS, {"stage": stage, "message": message}))

    def emit_plan(self, plan: dict[str, Any]) -> None:
        self.add(self._create_event(StreamEventType.PLAN, plan))

    def emit_tasks(self, tasks: list[dict[str, Any]]) -> None:
        self.add(self._create_event(StreamEventType.TASKS, {"tasks": tasks, "count": len(tasks)}))

    def emit_article(self, article: dict[str, Any]) -> None:
        self.add(self._create_event(StreamEventType.ARTICLE, article))

    def emit_error(self, error: str, stage: str | None = None) -> None:
        """Emit error event."""
        logger.error("Pipeline stream error", run_id=self.run_id, error=error, stage=stage)
        self.add(self._create_event(StreamEventType.ERROR, {"error": error, "stage": stage}))

    def emit_done(self, stage: str) -> None:
        """Emit completion and finish stream."""
        self.add(self._create_event(StreamEventType.DONE, {"stage": stage}))
        self.finish()
