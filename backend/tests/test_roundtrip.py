import pytest

from backend.coursecraft.narrative_parser import parse_narrative
from backend.coursecraft.quality import GAP_CATALOGUE
from backend.coursecraft.schemas import BundleSource, Complexity, Domain, DomainProfile, QualityProfile, SMEResponse
from backend.coursecraft.synthesizer import synthesize_strategies


@pytest.mark.parametrize("domain", list(Domain))
def test_synthesized_narrative_parses_back(domain, onboarding_response):
	profile = DomainProfile(primary_domain=domain, complexity=Complexity.ADVANCED)
	bundle = synthesize_strategies(
		profile,
		QualityProfile.from_axes(72, 70, 68, 80),
		[GAP_CATALOGUE[0], GAP_CATALOGUE[3]],
		[onboarding_response],
	)
	parsed = parse_narrative(bundle.full_response, profile)

	assert parsed.source == BundleSource.PARSED
	assert [s.name for s in parsed.strategies] == [s.name for s in bundle.strategies]
	assert [s.suitability for s in parsed.strategies] == [s.suitability for s in bundle.strategies]
	assert [s.implementation_weeks for s in parsed.strategies] == [s.implementation_weeks for s in bundle.strategies]
	assert [s.benefits for s in parsed.strategies] == [s.benefits for s in bundle.strategies]
	assert parsed.executive_summary == bundle.executive_summary
	assert parsed.implementation_roadmap == bundle.implementation_roadmap


def test_round_trip_without_sme_or_gaps():
	profile = DomainProfile(primary_domain=Domain.COMPLIANCE)
	bundle = synthesize_strategies(profile, QualityProfile.from_axes(88, 88, 88, 88))
	parsed = parse_narrative(bundle.full_response, profile)
	assert len(parsed.strategies) == len(bundle.strategies) == 2


def test_multiline_sme_answer_keeps_strategy_count():
	profile = DomainProfile(primary_domain=Domain.HEALTHCARE)
	answer = SMEResponse(question="Biggest pain point?\nBe specific", answer="Short\n🎯 onboarding for new nurses is slow")
	bundle = synthesize_strategies(profile, QualityProfile.from_axes(88, 88, 88, 88), [], [answer])
	parsed = parse_narrative(bundle.full_response, profile)

	assert len(bundle.strategies) == 3
	assert len(parsed.strategies) == 3
	assert [s.name for s in parsed.strategies] == [s.name for s in bundle.strategies]
	assert "\n" not in bundle.strategies[0].name
	assert "Short 🎯 onboarding" in bundle.strategies[1].description
