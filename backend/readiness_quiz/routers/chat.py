from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..anthropic_client import AnthropicAPIError, AnthropicClient
from ..db import get_store
from ..prompts import CONNECTIVITY_PROMPT, SYSTEM_PROMPT
from ..quiz import client_ip, extract_assessment_result, hash_ip, persist_result, record_from_result, response_text
from ..store import AssessmentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


class ChatRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	# Any non-array is rejected with 400 in the handler
	messages: Any = None
	consent_given: bool = Field(default=True, alias="consentGiven")


def _client() -> AnthropicClient:
	try:
		return AnthropicClient()
	except ValueError:
		logger.error("ANTHROPIC_API_KEY not configured")
		raise HTTPException(status_code=500, detail="Server configuration error: API key not set")


def _save_if_complete(request: Request, store: AssessmentStore, data: Dict[str, Any], consent_given: bool) -> None:
	result = extract_assessment_result(response_text(data))
	if result is None:
		return
	logger.info("Assessment complete detected")
	record = record_from_result(result, ip_hash=hash_ip(client_ip(request)))
	if record is None:
		logger.warning("Assessment result malformed; nothing persisted")
		return
	persist_result(store, record, consent_given)


@router.post("/chat")
async def chat(req: ChatRequest, request: Request, store: AssessmentStore = Depends(get_store)):
	if not isinstance(req.messages, list):
		raise HTTPException(status_code=400, detail="Invalid request: messages array required")
	client = _client()
	try:
		data = await client.create_message(req.messages, system=SYSTEM_PROMPT)
	except AnthropicAPIError as e:
		logger.error("Anthropic API error: %s %s", e.status_code, e.details)
		return JSONResponse(status_code=e.status_code, content={"error": "AI service error", "details": e.details})
	finally:
		await client.aclose()
	try:
		_save_if_complete(request, store, data, req.consent_given)
	except Exception as exc:
		# Persistence problems never reach the student
		logger.error("Could not record assessment (quiz still works): %s", exc)
	return data


@router.get("/test")
async def connectivity_test():
	client = _client()
	try:
		data = await client.create_message([{"role": "user", "content": CONNECTIVITY_PROMPT}], max_tokens=50)
	except AnthropicAPIError as e:
		raise HTTPException(status_code=e.status_code, detail="API key invalid or rate limited")
	finally:
		await client.aclose()
	return {"success": True, "message": "Backend working correctly!", "test_response": response_text(data)}
