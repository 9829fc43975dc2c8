"""Live quiz helpers: spot the final result in a model reply and persist it."""

from __future__ import annotations

import hashlib
import json
import logging
import re
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Request

from .pillars import PILLARS, TIERS, tier_title
from .records import AssessmentRecord
from .store import AssessmentStore
from .synthesizer import utcnow

logger = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()
_OPEN_BRACE = re.compile(r"\{")

LIVE_PREFIX = "session_"


def response_text(data: Dict[str, Any]) -> str:
    try:
        return data["content"][0]["text"] or ""
    except (KeyError, IndexError, TypeError):
        return ""


def extract_assessment_result(text: str) -> Optional[Dict[str, Any]]:
    """Return the final result object if the reply carries one, else None.

    Ordinary conversation turns and unparsable JSON both come back as None.
    """
    if not text or "assessment_complete" not in text:
        return None
    # Stray braces in prose are skipped; each opening brace is a candidate
    for match in _OPEN_BRACE.finditer(text):
        try:
            data, _ = _DECODER.raw_decode(text, match.start())
        except ValueError:
            continue
        if isinstance(data, dict) and data.get("assessment_complete") is True:
            return data
    logger.info("Reply mentions assessment_complete but no parsable result")
    return None


def hash_ip(ip: Optional[str]) -> Optional[str]:
    if not ip:
        return None
    return hashlib.sha256(ip.encode("utf-8")).hexdigest()


def client_ip(request: Request) -> Optional[str]:
    # Behind a proxy the real client is the first x-forwarded-for entry
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.client.host if request.client else None


def new_session_id() -> str:
    return f"{LIVE_PREFIX}{uuid.uuid4().hex}"


def record_from_result(
    result: Dict[str, Any],
    *,
    ip_hash: Optional[str] = None,
    session_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Optional[AssessmentRecord]:
    """Map the model's result JSON onto a record, or None when it is malformed."""
    if not isinstance(result, dict) or result.get("assessment_complete") is not True:
        return None
    pillars = result.get("pillars") or {}
    if not isinstance(pillars, dict):
        return None

    scores: Dict[str, int] = {}
    for pillar in PILLARS:
        entry = pillars.get(pillar.name) or {}
        raw = entry.get("score") if isinstance(entry, dict) else entry
        try:
            value = int(raw or 0)
        except (TypeError, ValueError):
            logger.warning("Unusable %s score %r in quiz result", pillar.name, raw)
            return None
        scores[pillar.name] = max(0, min(pillar.max_score, value))

    try:
        level = int(result.get("readiness_level"))
    except (TypeError, ValueError):
        return None
    if level not in {t.level for t in TIERS}:
        logger.warning("Readiness level %r outside 1-5", level)
        return None
    title = str(result.get("readiness_title") or tier_title(level))

    return AssessmentRecord.from_scores(
        session_id or new_session_id(),
        (now or utcnow()).replace(microsecond=0),
        scores,
        level,
        title,
        user_ip_hash=ip_hash,
        consent_given=True,
    )


def persist_result(store: AssessmentStore, record: AssessmentRecord, consent_given: bool) -> bool:
    """Save a finished quiz if the student agreed. Never raises."""
    if consent_given is not True:
        logger.info("Assessment %s not saved (user opted out)", record.session_id)
        return False
    try:
        saved = store.insert(record)
    except Exception as exc:
        logger.error("Database error, quiz result still returned: %s", exc)
        return False
    if saved:
        logger.info("Assessment %s saved", record.session_id)
    return saved
