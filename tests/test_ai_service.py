"""Tests for the AI helpers with a fake chat-completions client."""

import asyncio
import json

import pytest

from conftest import FakeAIClient
from core.exceptions import AIServiceError, AIUnavailableError
from services.ai_service import AIService, COACH_FALLBACK, SUMMARY_FALLBACK
from web.app import create_app
from fastapi.testclient import TestClient


def run(coro):
    return asyncio.run(coro)


def test_disabled_without_key():
    service = AIService(api_key=None)
    assert not service.enabled
    with pytest.raises(AIUnavailableError):
        run(service.coach_advice("How do I focus?"))


def test_enabled_with_key():
    assert AIService(api_key="sk-test").enabled


def test_generate_tasks_normalizes_output():
    reply = json.dumps({"tasks": [
        {"title": "Outline chapters", "description": "List them", "estimated_minutes": 45,
         "priority": "HIGH", "category": "Writing"},
        {"title": "Draft intro", "description": "", "estimatedMinutes": "60",
         "priority": "urgent", "category": "Writing"},
        {"title": "  ", "priority": "low"},
        "not a task",
    ]})
    client = FakeAIClient(reply)
    tasks = run(AIService(client=client).generate_tasks("Write a book"))

    assert tasks == [
        {"title": "Outline chapters", "description": "List them", "estimated_minutes": 45,
         "priority": "high", "category": "Writing"},
        {"title": "Draft intro", "description": None, "estimated_minutes": 60,
         "priority": "medium", "category": "Writing"},
    ]
    call = client.completions.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert "Write a book" in call["messages"][-1]["content"]


def test_generate_tasks_accepts_bare_list():
    client = FakeAIClient(json.dumps([{"title": "Step 1", "priority": "low"}]))
    tasks = run(AIService(client=client).generate_tasks("goal"))
    assert [t["title"] for t in tasks] == ["Step 1"]


def test_generate_tasks_non_list_is_empty():
    client = FakeAIClient(json.dumps({"tasks": "none"}))
    assert run(AIService(client=client).generate_tasks("goal")) == []


def test_generate_tasks_invalid_json():
    client = FakeAIClient("here are your tasks")
    with pytest.raises(AIServiceError):
        run(AIService(client=client).generate_tasks("goal"))


def test_generate_tasks_empty_reply():
    with pytest.raises(AIServiceError):
        run(AIService(client=FakeAIClient("")).generate_tasks("goal"))


def test_coach_advice_uses_system_prompt():
    client = FakeAIClient("Use time blocks.")
    assert run(AIService(client=client).coach_advice("Tips?")) == "Use time blocks."
    messages = client.completions.calls[0]["messages"]
    assert messages[0]["role"] == "system"
    assert messages[1] == {"role": "user", "content": "Tips?"}


def test_fallbacks_on_empty_answers():
    service = AIService(client=FakeAIClient("", ""))
    assert run(service.coach_advice("?")) == COACH_FALLBACK
    assert run(service.summarize_note("text")) == SUMMARY_FALLBACK


def test_client_failure_wrapped():
    service = AIService(client=FakeAIClient(RuntimeError("boom")))
    with pytest.raises(AIServiceError, match="boom"):
        run(service.summarize_note("text"))


# ---- endpoints ----


def test_ai_endpoints(client, fake_ai):
    fake_ai.completions.replies.extend([
        json.dumps({"tasks": [{"title": "Plan", "priority": "high"}]}),
        "Take breaks.",
        "Short summary.",
    ])

    resp = client.post("/api/ai/generate-tasks", json={"goal": "Launch site"})
    assert resp.status_code == 200
    assert resp.json()["tasks"][0]["title"] == "Plan"

    assert client.post("/api/ai/coach-advice", json={"question": "Help"}).json() == {"advice": "Take breaks."}
    assert client.post("/api/ai/summarize-note", json={"content": "Long note"}).json() == {"summary": "Short summary."}


def test_ai_endpoints_validate_input(client):
    assert client.post("/api/ai/generate-tasks", json={}).status_code == 422
    assert client.post("/api/ai/coach-advice", json={"question": ""}).status_code == 422


def test_ai_upstream_failure_is_502(client, fake_ai):
    fake_ai.completions.replies.append(RuntimeError("quota"))
    assert client.post("/api/ai/coach-advice", json={"question": "Help"}).status_code == 502


def test_ai_unconfigured_is_503(settings, storage, clock):
    app = create_app(settings, storage=storage, clock=clock)
    with TestClient(app) as test_client:
        resp = test_client.post("/api/ai/summarize-note", json={"content": "text"})
    assert resp.status_code == 503
