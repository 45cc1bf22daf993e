from __future__ import annotations
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..analysis import combine_units, sme_questions
from ..keywords import extract_keywords
from ..schemas import ContentAnalysis, PreSMEContext, SMEResponse, Session
from ..store import SessionStore
from ..deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sme", tags=["sme"])


class QuestionsRequest(BaseModel):
	session_id: str
	content_analysis: Optional[ContentAnalysis] = None


class QuestionsResponse(BaseModel):
	session_id: str
	domain: str
	questions: List[str]


class ResponsesRequest(BaseModel):
	session_id: str
	sme_responses: List[SMEResponse] = Field(min_length=1)


class StoredResponse(BaseModel):
	question: str
	answer: str
	keywords: List[str]


class ResponsesResult(BaseModel):
	session_id: str
	stored: int
	responses: List[StoredResponse]


class PreResponsesRequest(BaseModel):
	session_id: str
	pre_sme_context: PreSMEContext


@router.post("/questions", response_model=QuestionsResponse)
def questions(req: QuestionsRequest, store: SessionStore = Depends(get_store)):
	session = store.get(req.session_id)
	analysis = req.content_analysis or (session.analysis if session else None)
	if analysis is None:
		raise HTTPException(status_code=404, detail="no content analysis for session; call /content/analyze first")
	found = list(analysis.sme_questions)
	if not found:
		length = len(combine_units(session.contents)) if session else 0
		found = sme_questions(analysis.domain_classification.primary_domain, length)
	return QuestionsResponse(
		session_id=req.session_id,
		domain=analysis.domain_classification.primary_domain.value,
		questions=found,
	)


@router.post("/responses", response_model=ResponsesResult)
def store_responses(req: ResponsesRequest, store: SessionStore = Depends(get_store)):
	answered = [r for r in req.sme_responses if r.answer.strip()]
	if not answered:
		raise HTTPException(status_code=400, detail="all SME responses are empty")

	def _set(session: Session) -> None:
		session.sme_responses = answered

	store.update(req.session_id, _set)
	logger.info("Stored %d SME responses for %s", len(answered), req.session_id)
	return ResponsesResult(
		session_id=req.session_id,
		stored=len(answered),
		responses=[
			StoredResponse(question=r.question, answer=r.answer, keywords=extract_keywords(r.answer))
			for r in answered
		],
	)


@router.post("/pre-responses")
def store_pre_responses(req: PreResponsesRequest, store: SessionStore = Depends(get_store)):
	def _set(session: Session) -> None:
		session.pre_sme_context = req.pre_sme_context

	store.update(req.session_id, _set)
	logger.info(
		"Stored pre-SME context for %s (framework=%s)",
		req.session_id,
		req.pre_sme_context.instructional_framework,
	)
	return {"session_id": req.session_id, "pre_sme_context": req.pre_sme_context.model_dump()}
