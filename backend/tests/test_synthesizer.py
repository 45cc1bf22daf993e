from backend.coursecraft.catalogue import template_for
from backend.coursecraft.quality import GAP_CATALOGUE
from backend.coursecraft.schemas import (
	BundleSource,
	Complexity,
	DEFAULT_DOMAIN,
	Domain,
	DomainProfile,
	QualityProfile,
)
from backend.coursecraft.synthesizer import implementation_roadmap, synthesize_strategies


def _profile(domain=Domain.HEALTHCARE, complexity=Complexity.INTERMEDIATE):
	return DomainProfile(primary_domain=domain, complexity=complexity)


def test_full_inputs_produce_five_strategies(onboarding_response):
	gaps = [GAP_CATALOGUE[0], GAP_CATALOGUE[1]]
	bundle = synthesize_strategies(
		_profile(),
		QualityProfile.from_axes(70, 70, 70, 70),
		gaps,
		[onboarding_response],
	)
	assert [s.id for s in bundle.strategies] == [
		"domain_strategy_1",
		"sme_strategy_2",
		"gap_strategy_3",
		"quality_strategy_4",
		"complexity_strategy_5",
	]
	assert bundle.source == BundleSource.SYNTHESIZED
	assert "1 SME responses and 2 identified content gaps" in bundle.executive_summary


def test_minimal_inputs_produce_two_strategies():
	bundle = synthesize_strategies(_profile(), QualityProfile.from_axes(85, 85, 85, 85), [], [])
	assert [s.type for s in bundle.strategies] == [template_for(Domain.HEALTHCARE).type, "complexity_appropriate"]


def test_sme_answer_personalizes_strategies(onboarding_response):
	bundle = synthesize_strategies(_profile(), QualityProfile.from_axes(85, 85, 85, 85), [], [onboarding_response])
	domain, sme = bundle.strategies[0], bundle.strategies[1]
	assert domain.name.startswith(template_for(Domain.HEALTHCARE).name)
	assert "Onboarding new nurses takes to..." in domain.name
	assert domain.personalization_flags["sme_aligned"] is True
	assert sme.name == "SME Priority: onboarding & nurses & takes & long Enhancement System"
	assert sme.personalization_flags["sme_priority"] == onboarding_response.answer


def test_gap_drives_domain_description_without_sme():
	bundle = synthesize_strategies(_profile(), QualityProfile.from_axes(85, 85, 85, 85), [GAP_CATALOGUE[2]], [])
	assert GAP_CATALOGUE[2].description in bundle.strategies[0].description
	assert bundle.strategies[1].name == "Learning Objectives Undefined Resolution System"


def test_missing_profile_and_quality_use_defaults():
	bundle = synthesize_strategies(None, None)
	assert DEFAULT_DOMAIN.value in bundle.executive_summary
	# Zero quality always adds the quality strategy
	assert [s.id for s in bundle.strategies] == ["domain_strategy_1", "quality_strategy_4", "complexity_strategy_5"]


def test_inputs_not_mutated(onboarding_response):
	gaps = [GAP_CATALOGUE[0]]
	responses = [onboarding_response]
	synthesize_strategies(_profile(), QualityProfile.from_axes(70, 70, 70, 70), gaps, responses)
	assert gaps == [GAP_CATALOGUE[0]]
	assert responses == [onboarding_response]


def test_roadmap_phase_two_scales_with_count():
	roadmap = implementation_roadmap(5, Complexity.ADVANCED)
	assert roadmap.startswith("Implementation Timeline: 8-12 weeks")
	assert "Content Development & Integration (8-10 weeks)" in roadmap
	assert "(3-4 weeks)" in implementation_roadmap(2, Complexity.BEGINNER)


def test_strategy_count_bounds(onboarding_response):
	full = synthesize_strategies(_profile(), QualityProfile(overall=60), [GAP_CATALOGUE[0]], [onboarding_response])
	assert len(full.strategies) == 5
	bare = synthesize_strategies(_profile(), QualityProfile(overall=95), [], [])
	assert len(bare.strategies) == 2


def test_domain_description_quotes_sme_answer(onboarding_response):
	bundle = synthesize_strategies(_profile(), QualityProfile(overall=95), [], [onboarding_response])
	assert onboarding_response.answer in bundle.strategies[0].description
	assert onboarding_response.question in bundle.strategies[0].expert_rationale
