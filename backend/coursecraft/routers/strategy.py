from __future__ import annotations
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..deps import get_narrative_generator, get_store
from ..errors import MalformedInputError
from ..schemas import ContentAnalysis, PreSMEContext, SMEResponse, Session, StrategyBundle
from ..store import SessionStore
from ..strategy_service import NarrativeGenerator, generate_strategy_bundle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/strategy", tags=["strategy"])


class GenerateRequest(BaseModel):
	session_id: str
	content_analysis: Optional[ContentAnalysis] = None
	sme_responses: Optional[List[SMEResponse]] = None


class StrategyResponse(BaseModel):
	session_id: str
	domain: str
	complexity: str
	quality_score: int
	bundle: StrategyBundle


class LearningMapRequest(BaseModel):
	session_id: str


class LearningMapResponse(BaseModel):
	session_id: str
	content_analysis: ContentAnalysis
	pre_sme_context: Optional[PreSMEContext] = None
	sme_responses: List[SMEResponse]
	bundle: StrategyBundle


def _respond(session_id: str, analysis: ContentAnalysis, bundle: StrategyBundle) -> StrategyResponse:
	return StrategyResponse(
		session_id=session_id,
		domain=analysis.domain_classification.primary_domain.value,
		complexity=analysis.domain_classification.complexity.value,
		quality_score=analysis.quality_assessment.overall,
		bundle=bundle,
	)


@router.post("/generate", response_model=StrategyResponse)
async def generate(
	req: GenerateRequest,
	store: SessionStore = Depends(get_store),
	generator: Optional[NarrativeGenerator] = Depends(get_narrative_generator),
):
	session = store.get(req.session_id)
	analysis = req.content_analysis or (session.analysis if session else None)
	if req.sme_responses is not None:
		sme_responses = req.sme_responses
	else:
		sme_responses = session.sme_responses if session else []
	try:
		bundle = await generate_strategy_bundle(
			analysis,
			sme_responses,
			generator=generator,
			session_id=req.session_id,
		)
	except MalformedInputError as exc:
		raise HTTPException(status_code=400, detail=str(exc))

	def _save(s: Session) -> None:
		s.analysis = analysis
		s.sme_responses = list(sme_responses)
		s.strategy_bundle = bundle

	store.update(req.session_id, _save)
	logger.info("Generated %d strategies for %s (%s)", len(bundle.strategies), req.session_id, bundle.source.value)
	return _respond(req.session_id, analysis, bundle)


@router.get("/{session_id}", response_model=StrategyResponse)
def get_strategies(session_id: str, store: SessionStore = Depends(get_store)):
	session = store.get(session_id)
	if session is None or session.strategy_bundle is None or session.analysis is None:
		raise HTTPException(status_code=404, detail="no strategies generated for session")
	return _respond(session_id, session.analysis, session.strategy_bundle)


@router.post("/learning-map", response_model=LearningMapResponse)
async def learning_map(
	req: LearningMapRequest,
	store: SessionStore = Depends(get_store),
	generator: Optional[NarrativeGenerator] = Depends(get_narrative_generator),
):
	session = store.get(req.session_id)
	if session is None or session.analysis is None:
		raise HTTPException(status_code=404, detail="session data not found")
	bundle = session.strategy_bundle
	if bundle is None:
		bundle = await generate_strategy_bundle(
			session.analysis,
			session.sme_responses,
			generator=generator,
			session_id=req.session_id,
		)

		def _save(s: Session) -> None:
			s.strategy_bundle = bundle

		store.update(req.session_id, _save)
	return LearningMapResponse(
		session_id=req.session_id,
		content_analysis=session.analysis,
		pre_sme_context=session.pre_sme_context,
		sme_responses=session.sme_responses,
		bundle=bundle,
	)
