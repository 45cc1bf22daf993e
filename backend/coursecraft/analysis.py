from __future__ import annotations
import json
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from .blooms import assess_blooms
from .classifier import classify_domain, complexity_for_audience
from .errors import ExternalServiceError
from .prompts import build_analysis_prompt
from .quality import assess_quality
from .schemas import (
	AnalysisMetadata,
	ContentAnalysis,
	ContentUnit,
	Domain,
	DomainProfile,
	ExpertSuggestions,
	Justification,
	PreSMEContext,
	SuitabilityAssessment,
)

logger = logging.getLogger(__name__)

# (prompt) -> model text
AnalysisModel = Callable[[str], Awaitable[str]]

LONG_CONTENT_CHARS = 5000
ANALYSIS_SYSTEM_PROMPT = "You are an expert instructional designer. Always respond with valid JSON only."


def combine_units(units: Sequence[ContentUnit]) -> str:
	return "\n\n".join(unit.text for unit in units if unit.text)


def suitability_for(profile: DomainProfile) -> SuitabilityAssessment:
	score = profile.suitability_score
	if score >= 90:
		level = "Excellent"
	elif score >= 80:
		level = "Very Good"
	else:
		level = "Good"
	return SuitabilityAssessment(
		score=score,
		level=level,
		recommendation="Highly suitable for e-learning conversion with interactive elements",
	)


def sme_questions(domain: Domain, content_length: int) -> List[str]:
	label = domain.value.lower()
	questions = [
		f"What are the primary learning objectives for this {label} content?",
		f"Who is the target audience for this {label} material?",
		"What practical skills should learners gain from this content?",
		"How would you assess learner progress in this subject area?",
		"What real-world scenarios should be included in the training?",
	]
	if content_length > LONG_CONTENT_CHARS:
		questions.append("How should this comprehensive material be structured into learning modules?")
		questions.append("What prerequisite knowledge do learners need for this advanced content?")
	return questions


def analyze_content(units: Sequence[ContentUnit], pre_sme_context: Optional[PreSMEContext] = None) -> ContentAnalysis:
	text = combine_units(units)
	profile = classify_domain(text)
	# A stated audience level overrides the length-based complexity guess
	audience = complexity_for_audience(pre_sme_context.audience_level if pre_sme_context else None)
	if audience is not None:
		profile = profile.model_copy(update={"complexity": audience})
	quality, gaps = assess_quality(text)
	label = profile.primary_domain.value.lower()
	return ContentAnalysis(
		domain_classification=profile,
		suitability_assessment=suitability_for(profile),
		quality_assessment=quality,
		identified_gaps=gaps,
		blooms_taxonomy=assess_blooms(text),
		justification=Justification(
			line1=f"The {label} content was classified from keyword coverage and sized as {profile.complexity.value.lower()}.",
			line2=(
				f"Quality sits at {quality.overall}% with engagement at {quality.engagement}%; "
				f"{len(gaps)} gaps were flagged from missing structural cues."
			),
		),
		expert_suggestions=ExpertSuggestions(
			interactive_suggestions=[
				"Add hands-on exercises and practical demonstrations to reinforce key concepts",
				"Include interactive assessments and knowledge checks throughout the content",
				"Create scenario-based learning activities relevant to real-world applications",
			],
			key_recommendation=(
				"Implement a blended approach combining theoretical content with practical, interactive elements "
				"to maximize learner engagement and knowledge retention"
			),
		),
		sme_questions=sme_questions(profile.primary_domain, len(text)),
		metadata=AnalysisMetadata(
			source="heuristic",
			content_length=len(text),
			files_analyzed=len(units),
		),
	)


def extract_json_object(text: str) -> Dict[str, Any]:
	try:
		return json.loads(text)
	except Exception:
		pass
	code_block = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
	if code_block:
		try:
			return json.loads(code_block.group(1))
		except Exception:
			pass
	first = text.find("{")
	last = text.rfind("}")
	if first != -1 and last != -1 and last > first:
		try:
			return json.loads(text[first : last + 1])
		except Exception:
			pass
	raise ValueError("model did not return a JSON object")


def normalize_domain(value: Any) -> Optional[Domain]:
	label = str(value or "").strip().lower()
	for domain in Domain:
		if label == domain.value.lower() or domain.value.lower().startswith(label.split(" ")[0] or "\0"):
			return domain
	return None


async def analyze_content_with_model(
	units: Sequence[ContentUnit],
	model: Optional[AnalysisModel],
	pre_sme_context: Optional[PreSMEContext] = None,
	*,
	model_name: Optional[str] = None,
	max_chars: int = 4000,
) -> ContentAnalysis:
	"""Model-backed analysis with the heuristic analysis as fallback."""
	if model is None:
		return analyze_content(units, pre_sme_context)
	text = combine_units(units)
	file_names = [name for unit in units for name in unit.file_names]
	prompt = build_analysis_prompt(text, file_names, pre_sme_context, max_chars=max_chars)
	try:
		raw = await model(prompt)
		data = extract_json_object(raw)
		classification = data.get("domain_classification") or {}
		label = classification.get("primary_domain")
		domain = normalize_domain(label)
		if domain is None:
			domain = classify_domain(text).primary_domain
			logger.info("Model domain %r not recognised; using keyword domain %s", label, domain.value)
		classification["primary_domain"] = domain
		data["domain_classification"] = classification
		# The model reports axes only; overall is recomputed from them
		quality = data.get("quality_assessment") or {}
		quality.pop("overall", None)
		data["quality_assessment"] = quality
		data["metadata"] = AnalysisMetadata(
			source="model",
			model=model_name,
			content_length=len(text),
			files_analyzed=len(units),
		).model_dump()
		return ContentAnalysis.model_validate(data)
	except (ExternalServiceError, ValueError, ValidationError, TypeError, AttributeError) as exc:
		logger.warning("Model content analysis unavailable, using heuristics: %s", exc)
		return analyze_content(units, pre_sme_context)
