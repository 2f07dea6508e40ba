"""Dependency injection container for the research pipeline."""

from dataclasses import dataclass

from newsdesk.config.settings import Settings
from newsdesk.llm.base import TextGenerator
from newsdesk.llm.factory import provider_tag
from newsdesk.prompt_logs.base import PromptLogStore
from newsdesk.vector.base import VectorIndex
from newsdesk.workflow.compiler import ArticleCompiler
from newsdesk.workflow.decomposer import TaskDecomposer
from newsdesk.workflow.enricher import ContextEnricher
from newsdesk.workflow.executor import TaskExecutor
from newsdesk.workflow.orchestrator import PipelineOrchestrator
from newsdesk.workflow.planner import ResearchPlanner


@dataclass
class PipelineDependencies:
    """Container for the capabilities the pipeline runs against.

    Built once at startup from ``Settings``; components receive these
    explicitly instead of reading configuration themselves.
    """

    settings: Settings
    generator: TextGenerator
    vector_index: VectorIndex | None
    log_store: PromptLogStore | None

    def create_enricher(self) -> ContextEnricher:
        return ContextEnricher(
            vector_index=self.vector_index,
            log_store=self.log_store,
            provider=provider_tag(self.settings.generation_model),
            top_k=self.settings.vector_top_k,
        )

    def create_orchestrator(self) -> PipelineOrchestrator:
        return PipelineOrchestrator(
            planner=ResearchPlanner(
                self.create_enricher(),
                generator=self.generator,
                generate_outline=self.settings.generate_outline,
            ),
            decomposer=TaskDecomposer(),
            executor=TaskExecutor(self.generator),
            compiler=ArticleCompiler(),
            max_concurrent_tasks=self.settings.max_concurrent_tasks,
        )
