from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from .settings import settings


class AnthropicAPIError(Exception):
	def __init__(self, status_code: int, details: str) -> None:
		super().__init__(f"Anthropic API error {status_code}: {details}")
		self.status_code = status_code
		self.details = details


class AnthropicClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key or settings.anthropic_api_key
		if not self.api_key:
			raise ValueError("ANTHROPIC_API_KEY is not configured")
		self.model = model or settings.anthropic_model
		self.base_url = base_url or settings.anthropic_base_url
		self.version = settings.anthropic_version
		self._client = httpx.AsyncClient(timeout=settings.anthropic_timeout_seconds, transport=transport)

	def _headers(self) -> Dict[str, str]:
		return {
			"Content-Type": "application/json",
			"x-api-key": self.api_key,
			"anthropic-version": self.version,
		}

	async def create_message(
		self,
		messages: List[Dict[str, Any]],
		*,
		system: Optional[str] = None,
		max_tokens: Optional[int] = None,
	) -> Dict[str, Any]:
		"""POST to the Messages API and return the decoded response body."""
		payload: Dict[str, Any] = {
			"model": self.model,
			"max_tokens": max_tokens or settings.anthropic_max_tokens,
			"messages": messages,
		}
		if system:
			payload["system"] = system
		try:
			r = await self._client.post(self.base_url, headers=self._headers(), json=payload)
		except httpx.RequestError as net_err:
			raise AnthropicAPIError(502, f"request failed: {net_err}") from net_err
		if r.is_error:
			try:
				details = r.json().get("error", {}).get("message") or "Unknown error"
			except Exception:
				details = "Unknown error"
			raise AnthropicAPIError(r.status_code, details)
		try:
			return r.json()
		except ValueError as exc:
			raise AnthropicAPIError(502, f"Unexpected Anthropic response: {r.text[:200]}") from exc

	async def aclose(self) -> None:
		await self._client.aclose()
