"""Staged news research pipeline."""

from newsdesk.workflow.compiler import MAX_ARTICLE_IMAGES, ArticleCompiler
from newsdesk.workflow.decomposer import TaskDecomposer, depth_for_priority, priority_for_index
from newsdesk.workflow.dependencies import PipelineDependencies
from newsdesk.workflow.enricher import ContextEnricher
from newsdesk.workflow.executor import TaskExecutor
from newsdesk.workflow.orchestrator import (
    CancellationToken,
    PipelineOrchestrator,
    PipelineRun,
    PipelineStage,
    TaskOutcome,
)
from newsdesk.workflow.planner import ResearchPlanner

__all__ = [
    "ArticleCompiler",
    "CancellationToken",
    "ContextEnricher",
    "MAX_ARTICLE_IMAGES",
    "PipelineDependencies",
    "PipelineOrchestrator",
    "PipelineRun",
    "PipelineStage",
    "ResearchPlanner",
    "TaskDecomposer",
    "TaskExecutor",
    "TaskOutcome",
    "depth_for_priority",
    "priority_for_index",
]
