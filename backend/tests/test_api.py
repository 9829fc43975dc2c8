from __future__ import annotations

import hashlib
import json

from readiness_quiz.anthropic_client import AnthropicAPIError
from readiness_quiz.db import get_store
from readiness_quiz.main import app
from readiness_quiz.prompts import SYSTEM_PROMPT
from tests.conftest import make_record

FINAL_REPLY = {
    "assessment_complete": True,
    "readiness_level": 3,
    "readiness_title": "Need Foundation Work",
    "pillars": {
        "numeracy": {"score": 5, "max": 10},
        "reading": {"score": 2, "max": 5},
        "computer": {"score": 6, "max": 10},
        "logic": {"score": 4, "max": 8},
        "communication": {"score": 3, "max": 5},
        "mindset": {"score": 5, "max": 7},
    },
}

MESSAGES = [{"role": "user", "content": "I'm ready to start"}]


def _text_reply(text: str) -> dict:
    return {"id": "msg_1", "content": [{"type": "text", "text": text}], "stop_reason": "end_turn"}


def test_health(client):
    res = client.get("/")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "running"
    assert body["version"] == "1.0"
    assert "api_key_configured" in body


def test_chat_requires_messages(client, fake_anthropic):
    res = client.post("/api/chat", json={})
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid request: messages array required"
    assert fake_anthropic.calls == []


def test_chat_without_api_key(client, monkeypatch):
    from readiness_quiz.settings import settings

    monkeypatch.setattr(settings, "anthropic_api_key", None)
    res = client.post("/api/chat", json={"messages": MESSAGES})
    assert res.status_code == 500
    assert res.json()["detail"] == "Server configuration error: API key not set"


def test_chat_relays_reply_and_sends_tutor_prompt(client, fake_anthropic, store):
    res = client.post("/api/chat", json={"messages": MESSAGES})
    assert res.status_code == 200
    assert res.json() == {"content": [{"type": "text", "text": "Hello!"}]}
    assert fake_anthropic.calls[0]["messages"] == MESSAGES
    assert fake_anthropic.calls[0]["system"] == SYSTEM_PROMPT
    assert store.count() == 0


def test_completed_assessment_is_stored(client, fake_anthropic, store):
    fake_anthropic.reply = _text_reply("Here are your results!\n" + json.dumps(FINAL_REPLY))
    res = client.post(
        "/api/chat",
        json={"messages": MESSAGES, "consentGiven": True},
        headers={"x-forwarded-for": "203.0.113.7, 10.0.0.1"},
    )
    assert res.status_code == 200
    assert res.json() == fake_anthropic.reply

    saved = store.all()
    assert len(saved) == 1
    record = saved[0]
    assert record.session_id.startswith("session_")
    assert record.reading_score == 2
    assert record.readiness_level == 3
    assert record.user_ip_hash == hashlib.sha256(b"203.0.113.7").hexdigest()
    assert record.consent_given is True


def test_opted_out_assessment_is_not_stored(client, fake_anthropic, store):
    fake_anthropic.reply = _text_reply(json.dumps(FINAL_REPLY))
    res = client.post("/api/chat", json={"messages": MESSAGES, "consentGiven": False})
    assert res.status_code == 200
    assert store.count() == 0


def test_upstream_errors_keep_their_status(client, fake_anthropic):
    fake_anthropic.error = AnthropicAPIError(429, "rate limited")
    res = client.post("/api/chat", json={"messages": MESSAGES})
    assert res.status_code == 429
    assert res.json() == {"error": "AI service error", "details": "rate limited"}


def test_storage_failure_does_not_break_the_quiz(client, fake_anthropic):
    class BrokenStore:
        def insert(self, record):
            raise RuntimeError("database is locked")

    app.dependency_overrides[get_store] = lambda: BrokenStore()
    fake_anthropic.reply = _text_reply(json.dumps(FINAL_REPLY))
    res = client.post("/api/chat", json={"messages": MESSAGES})
    assert res.status_code == 200
    assert res.json() == fake_anthropic.reply


def test_connectivity_check(client, fake_anthropic):
    fake_anthropic.reply = _text_reply("Hello there friend")
    res = client.get("/api/test")
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "message": "Backend working correctly!",
        "test_response": "Hello there friend",
    }
    assert fake_anthropic.calls[0]["max_tokens"] == 50


def test_connectivity_check_reports_upstream_failure(client, fake_anthropic):
    fake_anthropic.error = AnthropicAPIError(401, "invalid x-api-key")
    res = client.get("/api/test")
    assert res.status_code == 401
    assert res.json()["detail"] == "API key invalid or rate limited"


def test_export_csv(client, store):
    store.insert(make_record("demo_001", {"numeracy": 7}, level=2, title="Ready with Quick Prep"))
    res = client.get("/api/export-csv")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert res.headers["content-disposition"] == 'attachment; filename="assessments.csv"'
    lines = res.text.splitlines()
    assert lines[0].startswith("session_id,timestamp,numeracy_score")
    assert lines[1].startswith("demo_001,2025-03-01 12:00:00,7,")


def test_patterns(client, store):
    store.insert(make_record("demo_001", {"reading": 1, "numeracy": 9, "computer": 9, "logic": 7, "communication": 5, "mindset": 6}))
    res = client.get("/api/patterns")
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 1
    assert body["primary"]["name"] == "reading"
    assert body["primary"]["weak_percent"] == 100.0


def test_chat_rejects_non_array_messages(client, fake_anthropic):
    for body in ({"messages": "hello"}, {"messages": {"role": "user"}}, {"messages": None}):
        res = client.post("/api/chat", json=body)
        assert res.status_code == 400
        assert res.json()["detail"] == "Invalid request: messages array required"
    assert fake_anthropic.calls == []
