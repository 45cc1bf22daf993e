from __future__ import annotations
import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from ..analysis import AnalysisModel, analyze_content_with_model
from ..deps import get_analysis_model, get_store
from ..extraction import extract_text
from ..schemas import ContentAnalysis, ContentUnit, PreSMEContext, Session
from ..settings import settings
from ..store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


class UploadedFile(BaseModel):
	id: str
	name: str
	size: int
	content_extracted: bool
	content_length: int
	extraction_method: str
	preview: str


class UploadResponse(BaseModel):
	session_id: str
	files: List[UploadedFile]


class AnalyzeRequest(BaseModel):
	session_id: str
	file_ids: Optional[List[str]] = None
	pre_sme_context: Optional[PreSMEContext] = None


class AnalyzeResponse(BaseModel):
	session_id: str
	analysis: ContentAnalysis


@router.post("/upload", response_model=UploadResponse)
async def upload(
	files: List[UploadFile] = File(...),
	session_id: Optional[str] = Form(default=None),
	store: SessionStore = Depends(get_store),
):
	if not files:
		raise HTTPException(status_code=400, detail="no files uploaded")
	if len(files) > settings.max_files_per_upload:
		raise HTTPException(status_code=400, detail=f"at most {settings.max_files_per_upload} files per upload")
	max_bytes = settings.max_upload_mb * 1024 * 1024
	units: List[ContentUnit] = []
	for file in files:
		data = await file.read()
		if len(data) > max_bytes:
			raise HTTPException(status_code=413, detail=f"{file.filename} exceeds {settings.max_upload_mb} MB")
		result = extract_text(file.filename or "upload", data)
		units.append(ContentUnit(
			text=result.text,
			file_names=[file.filename or "upload"],
			byte_size=len(data),
			extracted=result.extracted,
			extraction_method=result.method,
		))
		logger.info("Extracted %d characters from %s (%s)", len(result.text), file.filename, result.method)

	sid = session_id or uuid.uuid4().hex

	def _append(session: Session) -> None:
		session.contents.extend(units)

	store.update(sid, _append)
	return UploadResponse(
		session_id=sid,
		files=[
			UploadedFile(
				id=unit.id,
				name=unit.file_names[0],
				size=unit.byte_size,
				content_extracted=unit.extracted,
				content_length=len(unit.text),
				extraction_method=unit.extraction_method,
				preview=unit.preview,
			)
			for unit in units
		],
	)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
	req: AnalyzeRequest,
	store: SessionStore = Depends(get_store),
	model: Optional[AnalysisModel] = Depends(get_analysis_model),
):
	session = store.get(req.session_id)
	if session is None:
		raise HTTPException(status_code=404, detail="session not found")
	units = session.contents
	if req.file_ids:
		wanted = set(req.file_ids)
		units = [unit for unit in units if unit.id in wanted]
	if not units:
		raise HTTPException(status_code=404, detail="no valid content found for analysis")
	pre_sme_context = req.pre_sme_context or session.pre_sme_context
	analysis = await analyze_content_with_model(
		units,
		model,
		pre_sme_context,
		model_name=settings.gemini_model_analysis or settings.gemini_model,
		max_chars=settings.analysis_prompt_chars,
	)

	def _store_analysis(s: Session) -> None:
		s.analysis = analysis
		if req.pre_sme_context is not None:
			s.pre_sme_context = req.pre_sme_context

	store.update(req.session_id, _store_analysis)
	profile = analysis.domain_classification
	logger.info(
		"Analysis for %s: domain=%s complexity=%s quality=%d gaps=%d",
		req.session_id,
		profile.primary_domain.value,
		profile.complexity.value,
		analysis.quality_assessment.overall,
		len(analysis.identified_gaps),
	)
	return AnalyzeResponse(session_id=req.session_id, analysis=analysis)
