"""Research pipeline records.

Plans, tasks, results and the compiled article. Field names are snake_case in
Python and serialize with camelCase aliases, which is the JSON contract the
dashboard reads.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id(prefix: str) -> str:
    """Generate a prefixed unique identifier."""
    return f"{prefix}-{uuid4().hex[:12]}"


def utc_now_iso() -> str:
    """Current UTC time in ISO 8601 format."""
    return datetime.now(timezone.utc).isoformat()


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Enums ====================


class PlanStatus(str, Enum):
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ERROR = "error"


class TaskPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Ordinal used for sorting: high(0) < medium(1) < low(2)."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {TaskPriority.HIGH: 0, TaskPriority.MEDIUM: 1, TaskPriority.LOW: 2}


class ResearchDepth(str, Enum):
    DEEP = "deep"
    STANDARD = "standard"
    BRIEF = "brief"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ERROR = "error"


class ResultStatus(str, Enum):
    COMPLETED = "completed"
    ERROR = "error"


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


# ==================== Records ====================


class Source(CamelModel):
    """Cited source."""

    title: str = ""
    url: str = ""


class Image(CamelModel):
    """Image reference."""

    url: str
    alt: str = ""


class ResearchSection(CamelModel):
    """Single outline section of a research plan."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., description="Identifier unique within the plan")
    title: str
    description: str = ""


class TableOfContents(CamelModel):
    """Titled outline of research sections."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str
    sections: tuple[ResearchSection, ...] = ()


class ResearchPlan(CamelModel):
    """Research plan produced once per run by the planner."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: new_id("plan"))
    timestamp: str = Field(default_factory=utc_now_iso)
    original_prompt: str = Field(..., description="Enhanced prompt the plan was derived from")
    table_of_contents: TableOfContents
    status: PlanStatus = PlanStatus.CREATED
    error: str | None = None


class ResearchResult(CamelModel):
    """Outcome of one search query within a task."""

    id: str = Field(default_factory=lambda: new_id("result"))
    query: str
    timestamp: str = Field(default_factory=utc_now_iso)
    content: str = ""
    sources: list[Source] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)
    status: ResultStatus = ResultStatus.COMPLETED
    error: str | None = None


class ResearchTask(CamelModel):
    """Unit of research work derived from one outline section."""

    id: str
    section_id: str
    title: str
    description: str = ""
    priority: TaskPriority
    depth: ResearchDepth
    status: TaskStatus = TaskStatus.PENDING
    assigned_to: str | None = None
    search_queries: list[str] = Field(default_factory=list)
    results: list[ResearchResult] = Field(default_factory=list)
    error: str | None = None

    def completed_results(self) -> list[ResearchResult]:
        """Results whose query succeeded, in query order."""
        return [result for result in self.results if result.status == ResultStatus.COMPLETED]


class Article(CamelModel):
    """Final output of a pipeline run."""

    id: str = Field(default_factory=lambda: new_id("article"))
    title: str
    summary: str
    content: str
    sources: list[Source] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)
    published_at: str = Field(default_factory=utc_now_iso)
    category: str = "General"
    relevance_score: float = 0
    status: ArticleStatus = ArticleStatus.DRAFT
