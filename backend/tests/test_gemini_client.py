import json

import httpx
import pytest

from backend.coursecraft.errors import ExternalServiceError
from backend.coursecraft.gemini_client import GeminiClient
from backend.coursecraft.settings import settings


def _gemini_reply(text):
	return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_missing_key_is_an_external_service_error():
	with pytest.raises(ExternalServiceError):
		GeminiClient()


@pytest.mark.asyncio
async def test_generate_narrative_sends_system_instruction():
	seen = []

	def handler(request: httpx.Request) -> httpx.Response:
		seen.append(request)
		return httpx.Response(200, json=_gemini_reply("### 🎯 Primary Strategy: Drills"))

	client = GeminiClient("test-key", transport=httpx.MockTransport(handler), temperature=0.3)
	try:
		text = await client.generate_narrative("system text", "user text")
	finally:
		await client.aclose()

	assert text == "### 🎯 Primary Strategy: Drills"
	(request,) = seen
	assert request.url.params["key"] == "test-key"
	body = json.loads(request.content)
	assert body["systemInstruction"]["parts"][0]["text"] == "system text"
	assert body["contents"][0]["parts"][0]["text"] == "user text"
	assert body["generationConfig"]["temperature"] == 0.3


@pytest.mark.asyncio
async def test_http_error_without_fallback_raises():
	transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
	client = GeminiClient("test-key", transport=transport)
	try:
		with pytest.raises(ExternalServiceError):
			await client.generate_narrative("s", "u")
	finally:
		await client.aclose()


@pytest.mark.asyncio
async def test_malformed_reply_raises():
	transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
	client = GeminiClient("test-key", transport=transport)
	try:
		with pytest.raises(ExternalServiceError):
			await client.generate_narrative("s", "u")
	finally:
		await client.aclose()


@pytest.mark.asyncio
async def test_openrouter_fallback(monkeypatch):
	monkeypatch.setattr(settings, "openrouter_api_key", "or-key")

	def handler(request: httpx.Request) -> httpx.Response:
		if request.url.host == "openrouter.ai":
			assert request.headers["Authorization"] == "Bearer or-key"
			messages = json.loads(request.content)["messages"]
			assert [m["role"] for m in messages] == ["system", "user"]
			return httpx.Response(200, json={"choices": [{"message": {"content": "fallback narrative"}}]})
		return httpx.Response(500, text="boom")

	client = GeminiClient("test-key", transport=httpx.MockTransport(handler))
	try:
		assert await client.generate_narrative("s", "u") == "fallback narrative"
	finally:
		await client.aclose()


@pytest.mark.asyncio
async def test_fallback_failure_reports_openrouter(monkeypatch):
	monkeypatch.setattr(settings, "openrouter_api_key", "or-key")
	client = GeminiClient("test-key", transport=httpx.MockTransport(lambda request: httpx.Response(500)))
	try:
		with pytest.raises(ExternalServiceError) as excinfo:
			await client.generate_narrative("s", "u")
	finally:
		await client.aclose()
	assert excinfo.value.service == "openrouter"
