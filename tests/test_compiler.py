"""Tests for article compilation."""

from newsdesk.models.research import ArticleStatus, ResultStatus, TaskPriority, TaskStatus
from newsdesk.models.settings import NewsSettings
from newsdesk.workflow.compiler import MAX_ARTICLE_IMAGES, ArticleCompiler
from tests.mocks import make_result, make_task

HIGH, MEDIUM, LOW = TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.LOW


def test_title_uses_first_high_priority_task():
    tasks = [
        make_task("Regulatory Changes", MEDIUM),
        make_task("Industry Overview", HIGH),
        make_task("Competitor Analysis", HIGH),
    ]

    article = ArticleCompiler().compile(tasks, NewsSettings(industry="HPC"))

    assert article.title == "HPC Update: Industry Overview"


def test_title_without_high_priority_tasks():
    tasks = [make_task("Regulatory Changes", MEDIUM), make_task("Technology", LOW)]

    assert ArticleCompiler().compile(tasks, NewsSettings(industry="HPC")).title == "HPC News Update"
    assert ArticleCompiler().compile(tasks, NewsSettings()).title == "Industry News Update"


def test_images_capped_in_task_sorted_order():
    """Seven images across tasks; the first three by priority then result order are kept."""
    tasks = [
        make_task("Low Task", LOW, [make_result("low", images=3)]),
        make_task("High Task", HIGH, [make_result("high-a", images=1), make_result("high-b", images=1)]),
        make_task("Medium Task", MEDIUM, [make_result("medium", images=2)]),
    ]

    article = ArticleCompiler().compile(tasks, NewsSettings())

    assert len(article.images) == MAX_ARTICLE_IMAGES == 3
    assert [image.url for image in article.images] == [
        "https://img.example.com/high-a/0",
        "https://img.example.com/high-b/0",
        "https://img.example.com/medium/0",
    ]


def test_sections_sorted_stably_and_built_from_completed_results():
    tasks = [
        make_task("Second Medium", MEDIUM, [make_result("m2")]),
        make_task("Top", HIGH, [make_result("ok"), make_result("bad", status=ResultStatus.ERROR)]),
        make_task("Third Medium", MEDIUM, [make_result("m3")]),
    ]

    article = ArticleCompiler().compile(tasks, NewsSettings())

    assert article.content == "## Top\n\nok\n\n## Second Medium\n\nm2\n\n## Third Medium\n\nm3"
    assert [source.title for source in article.sources] == ["ok source 0", "m2 source 0", "m3 source 0"]


def test_failed_task_renders_empty_section():
    tasks = [make_task("Broken", HIGH, status=TaskStatus.ERROR)]

    article = ArticleCompiler().compile(tasks, NewsSettings())

    assert article.content == "## Broken\n\n"
    assert article.sources == []


def test_sources_are_not_deduplicated():
    shared = make_result("same")
    tasks = [make_task("A", HIGH, [shared]), make_task("B", HIGH, [shared])]

    article = ArticleCompiler().compile(tasks, NewsSettings())

    assert len(article.sources) == 2
    assert article.sources[0].url == article.sources[1].url


def test_summary_and_fixed_fields():
    tasks = [make_task("Industry Overview", HIGH), make_task("Competitor Analysis", HIGH), make_task("X", LOW)]

    article = ArticleCompiler().compile(tasks, NewsSettings(industry="HPC"))

    assert article.summary == (
        "This article provides an overview of recent developments in the HPC, "
        "focusing on industry overview and competitor analysis."
    )
    assert article.category == "HPC"
    assert article.relevance_score == 90
    assert article.status == ArticleStatus.PUBLISHED
    assert article.id.startswith("article-")


def test_empty_task_list_yields_empty_article():
    article = ArticleCompiler().compile([], NewsSettings())

    assert article.content == ""
    assert article.sources == []
    assert article.images == []
    assert article.category == "General"
    assert article.title == "Industry News Update"


def test_article_serializes_with_camel_case():
    data = ArticleCompiler().compile([], NewsSettings()).model_dump(by_alias=True)

    assert "publishedAt" in data
    assert "relevanceScore" in data
