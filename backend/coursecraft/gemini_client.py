from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, List, Optional, Tuple
from .errors import ExternalServiceError
from .settings import settings

logger = logging.getLogger(__name__)

AI_STUDIO_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
VERTEX_URL = (
	"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}"
	"/publishers/google/models/{model}:generateContent"
)


def gemini_endpoint(model: str) -> Tuple[str, bool]:
	"""Return (url, key_in_query) for the configured provider."""
	if settings.gemini_provider == "vertex":
		region = settings.vertex_region
		return VERTEX_URL.format(region=region, project=settings.vertex_project or "placeholder-project", model=model), False
	return AI_STUDIO_URL.format(model=model), True


def _first_candidate_text(data: Dict[str, Any]) -> str:
	return data["candidates"][0]["content"]["parts"][0]["text"]


def _first_choice_text(data: Dict[str, Any]) -> str:
	return data["choices"][0]["message"]["content"]


class GeminiClient:
	"""Narrative generator backed by Gemini, with an optional OpenRouter fallback.

	Every failure surfaces as ExternalServiceError so callers can route to the
	local synthesizer.
	"""

	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
		max_output_tokens: int = 4000,
		temperature: float = 0.7,
	) -> None:
		self.api_key = api_key or settings.gemini_api_key
		if not self.api_key:
			raise ExternalServiceError("GEMINI_API_KEY is not configured")
		self.model = model or settings.gemini_model
		endpoint, self._key_in_query = gemini_endpoint(self.model)
		self.base_url = base_url or endpoint
		self.max_output_tokens = max_output_tokens
		self.temperature = temperature
		timeout = settings.request_timeout_seconds
		self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
		self._openrouter_key = settings.openrouter_api_key
		self._openrouter: Optional[httpx.AsyncClient] = None
		if self._openrouter_key:
			self._openrouter = httpx.AsyncClient(timeout=timeout, transport=transport)

	async def generate_narrative(self, system_prompt: str, user_prompt: str) -> str:
		payload: Dict[str, Any] = {
			"systemInstruction": {"parts": [{"text": system_prompt}]},
			"contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
			"generationConfig": {
				"maxOutputTokens": self.max_output_tokens,
				"temperature": self.temperature,
			},
		}
		try:
			return await self._call_gemini(payload)
		except ExternalServiceError as primary:
			if self._openrouter is None:
				raise
			logger.warning("Gemini call failed, trying OpenRouter: %s", primary)
			messages = [
				{"role": "system", "content": system_prompt},
				{"role": "user", "content": user_prompt},
			]
			return await self._call_openrouter(messages, primary)

	async def _call_gemini(self, payload: Dict[str, Any]) -> str:
		params: Dict[str, str] = {}
		headers: Dict[str, str] = {}
		if self._key_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPError as err:
			raise ExternalServiceError(f"Gemini request failed: {err}") from err
		try:
			return _first_candidate_text(r.json())
		except (ValueError, KeyError, IndexError, TypeError) as err:
			raise ExternalServiceError(f"Unexpected Gemini response: {r.text[:500]}") from err

	async def _call_openrouter(self, messages: List[Dict[str, str]], primary: Exception) -> str:
		headers = {
			"Authorization": f"Bearer {self._openrouter_key}",
			"Content-Type": "application/json",
			"HTTP-Referer": settings.openrouter_referer,
			"X-Title": settings.openrouter_title,
		}
		payload = {"model": settings.openrouter_model, "messages": messages}
		try:
			r = await self._openrouter.post(settings.openrouter_base_url, headers=headers, json=payload)
			r.raise_for_status()
			return _first_choice_text(r.json())
		except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as err:
			raise ExternalServiceError(
				f"Gemini failed ({primary}); OpenRouter fallback also failed: {err}",
				service="openrouter",
			) from err

	async def aclose(self) -> None:
		await self._client.aclose()
		if self._openrouter is not None:
			await self._openrouter.aclose()
