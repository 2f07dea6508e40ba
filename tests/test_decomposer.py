"""Tests for task decomposition."""

from types import SimpleNamespace

import pytest

from newsdesk.config.settings import Settings
from newsdesk.llm.chat import ChatTextGenerator
from newsdesk.llm.mock import MockChatModel
from newsdesk.models.research import ResearchDepth, ResearchPlan, ResearchSection, TaskPriority, TaskStatus
from newsdesk.models.settings import NewsSettings
from newsdesk.workflow.decomposer import (
    TaskDecomposer,
    depth_for_priority,
    priority_for_index,
    search_queries,
    section_role,
)
from newsdesk.workflow.enricher import ContextEnricher
from newsdesk.workflow.planner import ResearchPlanner, default_outline
from tests.mocks import make_plan

HIGH, MEDIUM, LOW = TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.LOW


@pytest.mark.parametrize(
    "section_count, expected",
    [
        (0, []),
        (1, [HIGH]),
        (4, [HIGH, HIGH, MEDIUM, MEDIUM]),
        (5, [HIGH, HIGH, MEDIUM, MEDIUM, LOW]),
        (7, [HIGH, HIGH, MEDIUM, MEDIUM, LOW, LOW, LOW]),
    ],
)
def test_priority_follows_section_index(section_count, expected, news_settings):
    """Sections 0-1 are high, 2-3 medium, the rest low."""
    tasks = TaskDecomposer().decompose(make_plan(section_count), news_settings)

    assert [task.priority for task in tasks] == expected


def test_one_task_per_section_in_order(news_settings):
    plan = make_plan(6, prefix="custom")
    tasks = TaskDecomposer().decompose(plan, news_settings)

    assert len(tasks) == 6
    assert [task.section_id for task in tasks] == [section.id for section in plan.table_of_contents.sections]
    assert [task.title for task in tasks] == [section.title for section in plan.table_of_contents.sections]
    assert tasks[0].id == "task-custom-1"


def test_depth_is_deep_only_for_high_priority(news_settings):
    tasks = TaskDecomposer().decompose(make_plan(5), news_settings)

    assert [task.depth for task in tasks] == [
        ResearchDepth.DEEP,
        ResearchDepth.DEEP,
        ResearchDepth.STANDARD,
        ResearchDepth.STANDARD,
        ResearchDepth.STANDARD,
    ]
    assert depth_for_priority(LOW) == ResearchDepth.STANDARD
    assert priority_for_index(100) == LOW


def test_tasks_start_pending_and_empty(news_settings):
    for task in TaskDecomposer().decompose(make_plan(3), news_settings):
        assert task.status == TaskStatus.PENDING
        assert task.assigned_to is None
        assert task.results == []
        assert task.error is None


def test_default_outline_queries(news_settings):
    plan = ResearchPlan(original_prompt="p", table_of_contents=default_outline(news_settings))
    tasks = TaskDecomposer().decompose(plan, news_settings)

    assert tasks[0].search_queries == [
        "Latest trends in HPC",
        "Current state of HPC market",
        "HPC outlook 2023-2024",
    ]
    assert tasks[1].search_queries == [
        "Vertiv OR Schneider Electric recent developments",
        "Vertiv OR Schneider Electric market strategy",
        "Vertiv OR Schneider Electric new products",
    ]
    assert tasks[2].search_queries[1] == "Growth areas for Kontena in HPC"
    assert tasks[3].search_queries[0] == "HPC regulation changes"
    assert tasks[4].search_queries[2] == "Innovation trends affecting HPC"


def test_unknown_section_uses_generic_queries(news_settings):
    section = ResearchSection(id="supply", title="Supply Chain")

    assert search_queries(section, news_settings) == [
        "Supply Chain in HPC",
        "Supply Chain related to Kontena",
    ]


def test_missing_company_and_industry_use_defaults():
    settings = NewsSettings()

    assert search_queries(ResearchSection(id="x", title="Pricing"), settings) == [
        "Pricing in the industry",
        "Pricing related to the company",
    ]
    assert search_queries(ResearchSection(id="x", title="Competitor Analysis"), settings)[0] == (
        "the industry competitors recent developments"
    )


def test_decompose_is_idempotent(news_settings):
    plan = make_plan(5)
    decomposer = TaskDecomposer()

    first = decomposer.decompose(plan, news_settings)
    second = decomposer.decompose(plan, news_settings)

    assert [task.model_dump() for task in first] == [task.model_dump() for task in second]


def test_plan_without_table_of_contents_raises(news_settings):
    malformed = SimpleNamespace(id="plan-broken", table_of_contents=None)

    with pytest.raises(ValueError):
        TaskDecomposer().decompose(malformed, news_settings)


@pytest.mark.asyncio
async def test_generated_outline_queries_follow_section_titles(news_settings):
    """A generated outline's third section is Technology Innovations, not the default's Market Opportunities."""
    generator = ChatTextGenerator(Settings(llm_mode="mock"), llm=MockChatModel())
    planner = ResearchPlanner(ContextEnricher(), generator=generator, generate_outline=True)

    plan = await planner.plan(news_settings)
    tasks = TaskDecomposer().decompose(plan, news_settings)

    assert [task.title for task in tasks] == ["Industry Overview", "Competitor Analysis", "Technology Innovations"]
    assert tasks[2].search_queries == [
        "New technologies in HPC",
        "Technology disruption in HPC",
        "Innovation trends affecting HPC",
    ]


def test_numbered_sections_do_not_inherit_default_queries(news_settings):
    tasks = TaskDecomposer().decompose(make_plan(2), news_settings)

    assert tasks[0].search_queries == ["Topic 1 in HPC", "Topic 1 related to Kontena"]
    assert tasks[1].search_queries == ["Topic 2 in HPC", "Topic 2 related to Kontena"]


def test_section_role_ignores_case_and_spacing():
    assert section_role(ResearchSection(id="a", title="  regulatory   CHANGES ")) == "regulation"
    assert section_role(ResearchSection(id="b", title="Regulation")) is None
