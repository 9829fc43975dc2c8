from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from readiness_quiz.db import get_store
from readiness_quiz.main import app
from readiness_quiz.records import AssessmentRecord
from readiness_quiz.store import AssessmentStore

FIXED_NOW = datetime(2025, 3, 1, 12, 0, 0)


def make_record(
    session_id: str,
    scores: Dict[str, int],
    *,
    level: int = 3,
    title: str = "Need Foundation Work",
    minutes_ago: int = 0,
    ip_hash: str | None = None,
    consent: bool | None = True,
) -> AssessmentRecord:
    """Build a record with explicit scores; missing pillars default to 0."""

    full = {name: scores.get(name, 0) for name in ("numeracy", "reading", "computer", "logic", "communication", "mindset")}
    return AssessmentRecord.from_scores(
        session_id,
        FIXED_NOW - timedelta(minutes=minutes_ago),
        full,
        level,
        title,
        user_ip_hash=ip_hash,
        consent_given=consent,
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'assessments.db'}"


@pytest.fixture
def store(database_url):
    s = AssessmentStore(database_url).open()
    yield s
    s.close()


class FakeAnthropicClient:
    """Stands in for the HTTP client; records calls and replays a canned reply."""

    reply: Dict[str, Any] = {}
    error: Exception | None = None
    calls: List[Dict[str, Any]] = []

    def __init__(self, *args, **kwargs) -> None:
        pass

    async def create_message(self, messages, *, system=None, max_tokens=None):
        type(self).calls.append({"messages": messages, "system": system, "max_tokens": max_tokens})
        if type(self).error is not None:
            raise type(self).error
        return type(self).reply

    async def aclose(self) -> None:
        pass


@pytest.fixture
def fake_anthropic(monkeypatch):
    import readiness_quiz.routers.chat as chat_router

    FakeAnthropicClient.reply = {"content": [{"type": "text", "text": "Hello!"}]}
    FakeAnthropicClient.error = None
    FakeAnthropicClient.calls = []
    monkeypatch.setattr(chat_router, "AnthropicClient", FakeAnthropicClient)
    return FakeAnthropicClient


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
