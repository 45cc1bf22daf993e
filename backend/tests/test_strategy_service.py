import pytest

from backend.coursecraft.errors import ExternalServiceError, MalformedInputError
from backend.coursecraft.schemas import BundleSource, ContentAnalysis
from backend.coursecraft.strategy_service import generate_strategy_bundle


NARRATIVE = """## Executive Summary
Two targeted strategies.

### 🎯 Primary Strategy: Shadowing Rotations
Structured shadowing rotations pair each new nurse with a preceptor for the first month.
**Suitability**: 95%

### 🎯 Supporting Strategy: Intake Checklists
Printable intake checklists reduce missed steps during the first weeks on the ward.
**Suitability**: 90%
"""


class FakeGenerator:
	def __init__(self, reply=None, error=None):
		self.reply = reply
		self.error = error
		self.calls = []

	async def __call__(self, system_prompt, user_prompt):
		self.calls.append((system_prompt, user_prompt))
		if self.error:
			raise self.error
		return self.reply


@pytest.mark.asyncio
async def test_structured_reply_is_parsed(clinical_analysis, onboarding_response):
	generator = FakeGenerator(reply=NARRATIVE)
	bundle = await generate_strategy_bundle(clinical_analysis, [onboarding_response], generator=generator, session_id="s1")
	assert bundle.source == BundleSource.PARSED
	assert [s.name for s in bundle.strategies] == ["Shadowing Rotations", "Intake Checklists"]
	assert len(generator.calls) == 1
	system_prompt, user_prompt = generator.calls[0]
	assert "🎯" in system_prompt
	assert "SESSION: s1" in user_prompt
	assert onboarding_response.answer in user_prompt


@pytest.mark.asyncio
async def test_generator_failure_falls_back_once(clinical_analysis):
	generator = FakeGenerator(error=ExternalServiceError("quota exceeded"))
	bundle = await generate_strategy_bundle(clinical_analysis, [], generator=generator)
	assert bundle.source == BundleSource.SYNTHESIZED
	assert len(generator.calls) == 1


@pytest.mark.asyncio
async def test_unstructured_reply_uses_fallback_strategy(clinical_analysis):
	bundle = await generate_strategy_bundle(clinical_analysis, [], generator=FakeGenerator(reply="Use blended learning."))
	assert bundle.source == BundleSource.PARSED_FALLBACK
	assert bundle.strategies[0].full_content == "Use blended learning."


@pytest.mark.asyncio
async def test_no_generator_synthesizes(clinical_analysis):
	bundle = await generate_strategy_bundle(clinical_analysis)
	assert bundle.source == BundleSource.SYNTHESIZED


@pytest.mark.asyncio
async def test_empty_analysis_is_defaulted():
	bundle = await generate_strategy_bundle(ContentAnalysis())
	assert bundle.source == BundleSource.SYNTHESIZED
	assert len(bundle.strategies) >= 2


@pytest.mark.asyncio
async def test_missing_analysis_rejected():
	with pytest.raises(MalformedInputError):
		await generate_strategy_bundle(None)


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["", "   ", "\n\t\n", None])
async def test_blank_reply_synthesizes(clinical_analysis, onboarding_response, reply):
	generator = FakeGenerator(reply=reply)
	bundle = await generate_strategy_bundle(clinical_analysis, [onboarding_response], generator=generator)
	assert bundle.source == BundleSource.SYNTHESIZED
	assert bundle.strategies[0].id == "domain_strategy_1"
	assert len(generator.calls) == 1
