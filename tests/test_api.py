"""API tests against the app running in mock mode."""

import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from newsdesk.api.app import create_app
from newsdesk.api.routes.pipeline import _prune_runs
from newsdesk.config.settings import Settings, get_settings
from newsdesk.workflow.orchestrator import PipelineRun, PipelineStage

SETTINGS = {
    "companyName": "Kontena",
    "industry": "HPC",
    "keyProducts": ["Modular HPC solutions"],
    "competitors": ["Vertiv"],
    "interests": ["energy efficiency"],
}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("LLM_MODE", "mock")
    get_settings.cache_clear()
    with TestClient(create_app()) as test_client:
        yield test_client
    get_settings.cache_clear()


def _events(response) -> list[dict]:
    events = []
    for line in response.iter_lines():
        if line.startswith("data: "):
            events.append(json.loads(line[len("data: "):]))
    return events


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_config_reports_offline_backends(client):
    data = client.get("/api/config").json()

    assert data["llm_mode"] == "mock"
    assert data["vector_store"] == "memory"
    assert data["prompt_log_store"] == "memory"
    assert data["embedding_provider"] == "mock"
    assert data["max_concurrent_tasks"] == 1


def test_run_sync_returns_article(client):
    response = client.post("/api/pipeline/run/sync", json=SETTINGS)

    assert response.status_code == 200
    article = response.json()
    assert article["title"] == "HPC Update: Industry Overview"
    assert article["category"] == "HPC"
    assert article["status"] == "published"
    assert "publishedAt" in article
    assert "## Industry Overview" in article["content"]
    assert len(article["images"]) <= 3
    assert article["sources"]


def test_streaming_run(client):
    with client.stream("POST", "/api/pipeline/run", json=SETTINGS) as response:
        assert response.status_code == 200
        run_id = response.headers["x-run-id"]
        events = _events(response)

    types = [event["type"] for event in events]
    assert types[0] == "init"
    assert types[-1] == "done"
    assert {"progress", "plan", "tasks", "article"} <= set(types)
    assert all(event["run_id"] == run_id for event in events)

    tasks_event = next(event for event in events if event["type"] == "tasks")
    assert tasks_event["data"]["count"] == 5
    assert events[-1]["data"]["stage"] == "completed"

    run = client.get(f"/api/pipeline/{run_id}").json()
    assert run["stage"] == "completed"
    assert run["article"]["title"] == "HPC Update: Industry Overview"

    assert client.post(f"/api/pipeline/{run_id}/cancel").status_code == 400


def test_unknown_run(client):
    assert client.get("/api/pipeline/run-missing").status_code == 404
    assert client.post("/api/pipeline/run-missing/cancel").status_code == 404


def test_enhance_and_prompt_logs(client):
    payload = {"basePrompt": "Find HPC news", "settings": {**SETTINGS, "enablePromptLogging": True}}

    enhanced = client.post("/api/prompts/enhance", json=payload).json()

    assert enhanced["logId"]
    assert "Company Name: Kontena" in enhanced["enhancedPrompt"]
    assert "BASE PROMPT:\nFind HPC news" in enhanced["enhancedPrompt"]

    listed = client.get("/api/prompt-logs").json()
    assert listed["count"] == 1
    assert listed["logs"][0]["id"] == enhanced["logId"]
    assert listed["logs"][0]["originalPrompt"] == "Find HPC news"

    assert client.get("/api/prompt-logs/search", params={"q": "find hpc"}).json()["count"] == 1
    assert client.get("/api/prompt-logs/search", params={"q": "bitcoin"}).json()["count"] == 0

    deleted = client.delete("/api/prompt-logs", params={"retention_days": 30}).json()
    assert deleted == {"deleted": 0, "retentionDays": 30}


def test_enhance_without_logging_has_no_log_id(client):
    enhanced = client.post("/api/prompts/enhance", json={"settings": SETTINGS}).json()

    assert enhanced["logId"] is None
    assert client.get("/api/prompt-logs").json()["count"] == 0


def test_news_feed(client):
    response = client.post("/api/news", json={"settings": SETTINGS})

    assert response.status_code == 200
    data = response.json()
    assert len(data["articles"]) == 3
    assert data["dailySummary"]["articleCount"] == 3
    assert data["dailySummary"]["summary"].startswith("Today's news highlights 3 key articles")


def test_news_feed_filter(client):
    payload = {"settings": SETTINGS, "filter": {"categories": ["Regulation"]}}

    data = client.post("/api/news", json=payload).json()

    assert [article["category"] for article in data["articles"]] == ["Regulation"]
    assert data["dailySummary"]["articleCount"] == 3


def test_connections(client):
    vector = client.get("/api/connections/vector").json()
    prompt_logs = client.get("/api/connections/prompt-logs").json()

    assert vector["connected"] is True
    assert vector["details"]["type"] == "memory"
    assert prompt_logs["connected"] is True


def test_vector_documents_feed_enrichment(client):
    stored = client.post(
        "/api/vector/documents",
        json={"title": "Kontena datasheet", "content": "Modular HPC solutions with liquid cooling"},
    ).json()

    assert stored["status"] == "stored"
    assert stored["id"].startswith("doc-")

    settings = {**SETTINGS, "vectorDbEnabled": True}
    enhanced = client.post("/api/prompts/enhance", json={"settings": settings}).json()
    assert "Kontena datasheet: Modular HPC solutions with liquid cooling" in enhanced["enhancedPrompt"]

    deleted = client.delete(f"/api/vector/documents/{stored['id']}").json()
    assert deleted == {"id": stored["id"], "status": "deleted"}

    fallback = client.post("/api/prompts/enhance", json={"settings": settings}).json()
    assert "Company Name: Kontena" in fallback["enhancedPrompt"]


def test_finished_runs_are_bounded(monkeypatch):
    monkeypatch.setenv("LLM_MODE", "mock")
    monkeypatch.setenv("MAX_PIPELINE_RUNS", "5")
    get_settings.cache_clear()
    app = create_app()

    with TestClient(app) as test_client:
        for _ in range(20):
            assert test_client.post("/api/pipeline/run/sync", json=SETTINGS).status_code == 200
        assert len(app.state.pipeline_runs) <= 5

    get_settings.cache_clear()


def test_expired_runs_are_dropped(monkeypatch):
    monkeypatch.setenv("LLM_MODE", "mock")
    monkeypatch.setenv("PIPELINE_RUN_TTL_SECONDS", "0")
    get_settings.cache_clear()
    app = create_app()

    with TestClient(app) as test_client:
        for _ in range(3):
            test_client.post("/api/pipeline/run/sync", json=SETTINGS)
        assert len(app.state.pipeline_runs) <= 2

    get_settings.cache_clear()


def test_pruning_keeps_active_runs():
    finished = [
        PipelineRun(stage=PipelineStage.COMPLETED, finished_at="2025-01-01T00:00:00+00:00") for _ in range(3)
    ]
    active = [PipelineRun(stage=PipelineStage.EXECUTING) for _ in range(3)]
    runs = {run.id: run for run in [*finished, *active]}
    app_state = SimpleNamespace(
        settings=Settings(max_pipeline_runs=2, pipeline_run_ttl_seconds=10**9),
        pipeline_runs=runs,
    )

    _prune_runs(app_state)

    assert list(runs) == [run.id for run in active]
