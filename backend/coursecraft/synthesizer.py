from __future__ import annotations
import math
from typing import List, Optional, Sequence

from .catalogue import COMPLEXITY_TEMPLATES, template_for
from .keywords import extract_keywords
from .narrative_writer import flatten, render_narrative
from .schemas import (
	BundleSource,
	Complexity,
	DomainProfile,
	Gap,
	QualityProfile,
	SMEResponse,
	Strategy,
	StrategyBundle,
)

NAME_EXCERPT_CHARS = 30
DESCRIPTION_EXCERPT_CHARS = 100
QUALITY_THRESHOLD = 80
QUALITY_TARGET = 90

ROADMAP_TOTALS = {
	Complexity.BEGINNER: "6-8 weeks",
	Complexity.INTERMEDIATE: "6-10 weeks",
	Complexity.ADVANCED: "8-12 weeks",
}


def _excerpt(text: str, limit: int) -> str:
	text = flatten(text)
	if len(text) <= limit:
		return text
	return text[:limit] + "..."


def domain_strategy(
	profile: DomainProfile,
	quality: QualityProfile,
	gaps: Sequence[Gap],
	sme_responses: Sequence[SMEResponse],
	index: int,
) -> Strategy:
	template = template_for(profile.primary_domain)
	name = template.name
	description = template.description
	rationale = template.expert_rationale
	if sme_responses:
		first = sme_responses[0]
		name = f"{name} - {_excerpt(first.answer, NAME_EXCERPT_CHARS)} Focus"
		description += f' Specifically addressing: "{_excerpt(first.answer, DESCRIPTION_EXCERPT_CHARS)}"'
		rationale += f' Your SME emphasized "{flatten(first.question)}" which directly aligns with this strategic approach.'
	elif gaps:
		description += f' Prioritizes the identified gap: "{flatten(gaps[0].description)}".'
	else:
		description += f" Builds on the current content quality score of {quality.overall}%."
	return Strategy(
		id=f"domain_strategy_{index}",
		name=name,
		type=template.type,
		description=description,
		implementation_weeks=template.implementation_weeks,
		benefits=list(template.benefits),
		ideal_for=list(template.ideal_for),
		expert_rationale=rationale,
		suitability=template.suitability,
		personalization_flags={
			"personalized": True,
			"domain_specific": True,
			"sme_aligned": bool(sme_responses),
		},
	)


def sme_strategy(profile: DomainProfile, sme_responses: Sequence[SMEResponse], index: int) -> Strategy:
	primary = sme_responses[0]
	answer = flatten(primary.answer)
	question = flatten(primary.question)
	keywords = extract_keywords(answer)
	focus = " & ".join(keywords) if keywords else _excerpt(answer, NAME_EXCERPT_CHARS) or "Organizational Priority"
	domain = profile.primary_domain.value
	return Strategy(
		id=f"sme_strategy_{index}",
		name=f"SME Priority: {focus} Enhancement System",
		type="sme_focused",
		description=(
			f'Targeted learning system specifically designed to address the priority identified by your SME: "{answer}". '
			"This system focuses on practical application and immediate skill development in this specific area."
		),
		implementation_weeks="3-5 weeks",
		benefits=[
			"Directly addresses SME priorities",
			"Practical application focus",
			"Immediate skill application",
			"Organization-specific solutions",
		],
		ideal_for=[f"{domain} professionals with specific organizational needs"],
		expert_rationale=(
			f'Your SME response to "{question}" ("{answer}") reveals a specific organizational priority '
			"that requires targeted intervention. This strategy directly addresses that need."
		),
		suitability=88,
		personalization_flags={
			"personalized": True,
			"sme_aligned": True,
			"sme_priority": answer,
			"sme_keywords": keywords,
		},
	)


def gap_strategy(profile: DomainProfile, gaps: Sequence[Gap], index: int) -> Strategy:
	primary = gaps[0]
	domain = profile.primary_domain.value
	return Strategy(
		id=f"gap_strategy_{index}",
		name=f"{flatten(primary.type)} Resolution System",
		type="gap_focused",
		description=(
			f'Comprehensive system designed to address the critical gap: "{flatten(primary.type)}" ({flatten(primary.description)}). '
			"This system provides structured learning experiences to fill content gaps and improve overall learning effectiveness."
		),
		implementation_weeks="4-6 weeks",
		benefits=[
			"Closes critical content gaps",
			"Improves learning completion",
			"Enhances content quality",
			"Reduces learning barriers",
		],
		ideal_for=[f"{domain} learners with identified content gaps"],
		expert_rationale=(
			f'Analysis revealed "{primary.type}" as a critical gap with "{primary.severity.value}" severity. '
			"This strategy systematically addresses this gap to improve learning outcomes."
		),
		suitability=91,
		personalization_flags={
			"personalized": True,
			"gap_targeted": True,
			"targeted_gap": primary.type,
			"gap_severity": primary.severity.value,
		},
	)


def quality_strategy(profile: DomainProfile, quality: QualityProfile, index: int) -> Strategy:
	domain = profile.primary_domain.value
	score = quality.overall
	return Strategy(
		id=f"quality_strategy_{index}",
		name="Content Quality Enhancement & Engagement Booster",
		type="quality_enhancement",
		description=(
			f"Systematic approach to enhance content quality from current {score}% to {QUALITY_TARGET}%+ through improved "
			f"clarity, engagement elements, and interactive components specific to {domain} learning requirements."
		),
		implementation_weeks="3-4 weeks",
		benefits=[
			f"Improve quality from {score}% to {QUALITY_TARGET}%+",
			"Enhanced learner engagement",
			"Better content clarity",
			"Increased completion rates",
		],
		ideal_for=[f"{domain} content requiring quality improvements"],
		expert_rationale=(
			f"Current quality score of {score}% indicates significant opportunity for improvement. "
			f"This strategy targets specific quality metrics to reach the {QUALITY_TARGET}% professional standard."
		),
		suitability=89,
		personalization_flags={
			"personalized": True,
			"quality_targeted": True,
			"current_quality": score,
			"target_quality": QUALITY_TARGET,
		},
	)


def complexity_strategy(profile: DomainProfile, quality: QualityProfile, index: int) -> Strategy:
	domain = profile.primary_domain.value
	complexity = profile.complexity.value
	template = COMPLEXITY_TEMPLATES.get(complexity) or COMPLEXITY_TEMPLATES[Complexity.INTERMEDIATE.value]
	return Strategy(
		id=f"complexity_strategy_{index}",
		name=f"{domain} {template['name']}",
		type="complexity_appropriate",
		description=(
			f"{template['description']} Specifically designed for {complexity.lower()}-level {domain} professionals, "
			f"starting from a content quality score of {quality.overall}%."
		),
		implementation_weeks=str(template["implementation_weeks"]),
		benefits=list(template["benefits"]),
		ideal_for=[f"{complexity} level {domain} professionals"],
		expert_rationale=(
			f"The {complexity} complexity level of your content requires a specialized approach that matches "
			"learner sophistication and expectations."
		),
		suitability=87,
		personalization_flags={
			"personalized": True,
			"complexity_aligned": True,
			"target_complexity": complexity,
		},
	)


def executive_summary(profile: DomainProfile, sme_count: int, gap_count: int, strategy_count: int) -> str:
	return (
		f"Personalized analysis for {profile.primary_domain.value} content with {profile.complexity.value} complexity level. "
		f"Integrated {sme_count} SME responses and {gap_count} identified content gaps to generate {strategy_count} "
		"unique strategies addressing specific organizational priorities."
	)


def implementation_roadmap(strategy_count: int, complexity: Complexity) -> str:
	total = ROADMAP_TOTALS.get(complexity, ROADMAP_TOTALS[Complexity.INTERMEDIATE])
	low = math.ceil(strategy_count * 1.5)
	high = math.ceil(strategy_count * 2)
	return (
		f"Implementation Timeline: {total}\n\n"
		"Phase 1: Strategy Selection & Planning (1-2 weeks)\n"
		f"Phase 2: Content Development & Integration ({low}-{high} weeks)\n"
		"Phase 3: Testing & Refinement (1-2 weeks)\n"
		"Phase 4: Deployment & Training (1-2 weeks)"
	)


def build_strategies(
	profile: DomainProfile,
	quality: QualityProfile,
	gaps: Sequence[Gap],
	sme_responses: Sequence[SMEResponse],
) -> List[Strategy]:
	strategies = [domain_strategy(profile, quality, gaps, sme_responses, 1)]
	if sme_responses:
		strategies.append(sme_strategy(profile, sme_responses, 2))
	if gaps:
		strategies.append(gap_strategy(profile, gaps, 3))
	if quality.overall < QUALITY_THRESHOLD:
		strategies.append(quality_strategy(profile, quality, 4))
	# Kept even when it overlaps thematically with the domain strategy
	strategies.append(complexity_strategy(profile, quality, 5))
	return strategies


def synthesize_strategies(
	profile: Optional[DomainProfile],
	quality: Optional[QualityProfile],
	gaps: Optional[Sequence[Gap]] = None,
	sme_responses: Optional[Sequence[SMEResponse]] = None,
) -> StrategyBundle:
	profile = profile or DomainProfile()
	quality = quality or QualityProfile()
	gaps = list(gaps or [])
	sme_responses = list(sme_responses or [])

	strategies = build_strategies(profile, quality, gaps, sme_responses)
	bundle = StrategyBundle(
		strategies=strategies,
		executive_summary=executive_summary(profile, len(sme_responses), len(gaps), len(strategies)),
		implementation_roadmap=implementation_roadmap(len(strategies), profile.complexity),
		source=BundleSource.SYNTHESIZED,
	)
	bundle.full_response = render_narrative(bundle, profile, quality, gaps, sme_responses)
	return bundle
