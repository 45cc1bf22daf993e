import json

import pytest

from backend.coursecraft.analysis import (
	analyze_content,
	analyze_content_with_model,
	extract_json_object,
	normalize_domain,
)
from backend.coursecraft.errors import ExternalServiceError
from backend.coursecraft.prompts import build_analysis_prompt
from backend.coursecraft.schemas import Complexity, ContentUnit, Domain, PreSMEContext, Severity


MODEL_REPLY = {
	"domain_classification": {
		"primary_domain": "Healthcare",
		"content_type": "Clinical protocol",
		"confidence": 91,
		"complexity": "Advanced",
		"suitability_score": 90,
	},
	"quality_assessment": {"clarity": 80, "completeness": 70, "engagement": 60, "currency": 90, "overall": 99},
	"identified_gaps": [{"type": "No assessments", "severity": "High"}],
	"sme_questions": ["Which procedures do new nurses get wrong most often?"],
}


def test_heuristic_analysis(clinical_unit):
	analysis = analyze_content([clinical_unit])
	assert analysis.domain_classification.primary_domain == Domain.HEALTHCARE
	assert analysis.metadata.source == "heuristic"
	assert analysis.metadata.files_analyzed == 1
	assert len(analysis.sme_questions) == 5
	assert analysis.suitability_assessment.score == analysis.domain_classification.suitability_score
	assert "Understand" in analysis.blooms_taxonomy.current_levels


def test_long_content_gets_extra_questions():
	unit = ContentUnit(text="patient " * 700)
	assert len(analyze_content([unit]).sme_questions) == 7


@pytest.mark.asyncio
async def test_model_reply_is_used(clinical_unit):
	prompts = []

	async def model(prompt):
		prompts.append(prompt)
		return "```json\n" + json.dumps(MODEL_REPLY) + "\n```"

	context = PreSMEContext(learning_objective="Safe intake", instructional_framework="blooms")
	analysis = await analyze_content_with_model([clinical_unit], model, context, model_name="gemini-test")

	profile = analysis.domain_classification
	assert profile.primary_domain == Domain.HEALTHCARE
	assert profile.complexity == Complexity.ADVANCED
	assert analysis.quality_assessment.overall == 75
	assert analysis.identified_gaps[0].severity == Severity.HIGH
	assert analysis.metadata.source == "model"
	assert analysis.metadata.model == "gemini-test"
	assert "Safe intake" in prompts[0]
	assert "intake.txt" in prompts[0]


@pytest.mark.asyncio
async def test_unusable_reply_falls_back(clinical_unit):
	async def model(prompt):
		return "not json at all"

	analysis = await analyze_content_with_model([clinical_unit], model)
	assert analysis.metadata.source == "heuristic"
	assert analysis.domain_classification.primary_domain == Domain.HEALTHCARE


@pytest.mark.asyncio
async def test_model_failure_falls_back(clinical_unit):
	async def model(prompt):
		raise ExternalServiceError("timeout")

	analysis = await analyze_content_with_model([clinical_unit], model)
	assert analysis.metadata.source == "heuristic"


def test_extract_json_object_variants():
	assert extract_json_object('{"a": 1}') == {"a": 1}
	assert extract_json_object('Sure! {"a": 2} hope that helps') == {"a": 2}
	with pytest.raises(ValueError):
		extract_json_object("nothing here")


def test_normalize_domain_labels():
	assert normalize_domain("Healthcare & Medical") == Domain.HEALTHCARE
	assert normalize_domain("compliance") == Domain.COMPLIANCE
	assert normalize_domain("Technology") == Domain.TECHNOLOGY
	assert normalize_domain("") is None
	assert normalize_domain("Nursing") is None


def test_analysis_prompt_truncates_content():
	prompt = build_analysis_prompt("a" * 5000, ["big.txt"], max_chars=100)
	assert "a" * 100 in prompt
	assert "a" * 101 not in prompt


@pytest.mark.asyncio
async def test_unknown_model_domain_keeps_model_assessment(clinical_unit):
	reply = dict(MODEL_REPLY, domain_classification=dict(MODEL_REPLY["domain_classification"], primary_domain="Nursing"))

	async def model(prompt):
		return json.dumps(reply)

	analysis = await analyze_content_with_model([clinical_unit], model)
	assert analysis.metadata.source == "model"
	assert analysis.domain_classification.primary_domain == Domain.HEALTHCARE
	assert analysis.domain_classification.confidence == 91
	assert analysis.quality_assessment.overall == 75
	assert analysis.identified_gaps[0].type == "No assessments"
	assert analysis.sme_questions == MODEL_REPLY["sme_questions"]


def test_audience_level_sets_complexity(clinical_unit):
	assert analyze_content([clinical_unit]).domain_classification.complexity == Complexity.BEGINNER
	context = PreSMEContext(audience_level="Senior ICU specialists")
	analysis = analyze_content([clinical_unit], context)
	assert analysis.domain_classification.complexity == Complexity.ADVANCED
	unknown = analyze_content([clinical_unit], PreSMEContext(audience_level="everyone"))
	assert unknown.domain_classification.complexity == Complexity.BEGINNER
