from __future__ import annotations
from typing import AsyncIterator, Optional

from .analysis import ANALYSIS_SYSTEM_PROMPT, AnalysisModel
from .db import SessionLocal
from .gemini_client import GeminiClient
from .settings import settings
from .store import InMemorySessionStore, SessionStore, SqlSessionStore
from .strategy_service import NarrativeGenerator


def build_store() -> SessionStore:
	if settings.session_store == "memory":
		return InMemorySessionStore()
	return SqlSessionStore(SessionLocal)


_store: Optional[SessionStore] = None


def get_store() -> SessionStore:
	global _store
	if _store is None:
		_store = build_store()
	return _store


async def get_narrative_generator() -> AsyncIterator[Optional[NarrativeGenerator]]:
	if not settings.generator_configured:
		yield None
		return
	client = GeminiClient()
	try:
		yield client.generate_narrative
	finally:
		await client.aclose()


async def get_analysis_model() -> AsyncIterator[Optional[AnalysisModel]]:
	if not settings.generator_configured:
		yield None
		return
	client = GeminiClient(model=settings.gemini_model_analysis, temperature=0.3, max_output_tokens=2000)

	async def _analyze(prompt: str) -> str:
		return await client.generate_narrative(ANALYSIS_SYSTEM_PROMPT, prompt)

	try:
		yield _analyze
	finally:
		await client.aclose()
