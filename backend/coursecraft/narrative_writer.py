from __future__ import annotations
from typing import List, Sequence

from .keywords import extract_keywords
from .schemas import DomainProfile, Gap, QualityProfile, SMEResponse, StrategyBundle

STRATEGY_MARKER = "🎯"


def flatten(text: str) -> str:
	"""Collapse whitespace so free text stays on one narrative line."""
	return " ".join((text or "").split())


def quality_label(score: int) -> str:
	if score >= 80:
		return "Excellent foundation"
	if score >= 60:
		return "Good foundation with improvement opportunities"
	return "Significant improvement needed"


def _sme_lines(sme_responses: Sequence[SMEResponse]) -> List[str]:
	if not sme_responses:
		return ["No SME responses were provided."]
	lines = []
	for number, response in enumerate(sme_responses, start=1):
		answer = flatten(response.answer)
		if len(answer) > 100:
			answer = answer[:100] + "..."
		lines.append(f'{number}. {flatten(response.question)}: "{answer}"')
	return lines


def render_narrative(
	bundle: StrategyBundle,
	profile: DomainProfile,
	quality: QualityProfile,
	gaps: Sequence[Gap],
	sme_responses: Sequence[SMEResponse],
) -> str:
	"""Render a bundle as the markdown narrative the parser reads back."""
	domain = profile.primary_domain.value
	focus = ", ".join(extract_keywords(sme_responses[0].answer)) if sme_responses else "professional development priorities"
	out: List[str] = [
		f"# Personalized Strategy Analysis for {domain} Content",
		"",
		"## Executive Summary",
		bundle.executive_summary,
		"",
		"## Content & SME Analysis Integration",
		"",
		f"**Primary Domain**: {domain} ({profile.confidence}% confidence)",
		f"**Complexity Assessment**: {profile.complexity.value}",
		"**Critical SME Priorities Identified**:",
		*_sme_lines(sme_responses),
		"",
		"**Content Quality & Gap Impact**:",
		f"- Current Quality Score: {quality.overall}% - {quality_label(quality.overall)}",
		f"- Clarity {quality.clarity}%, Completeness {quality.completeness}%, Engagement {quality.engagement}%, Currency {quality.currency}%",
		f"- Critical Gaps: {len(gaps)} identified gaps requiring systematic resolution",
		"",
		"## Personalized Strategy Recommendations",
	]
	for index, strategy in enumerate(bundle.strategies):
		role = "Primary" if index == 0 else "Supporting"
		out.extend([
			"",
			f"### {STRATEGY_MARKER} {role} Strategy: {flatten(strategy.name)}",
			"",
			flatten(strategy.description),
			"",
			f"**Suitability**: {strategy.suitability}%",
			f"**SME Alignment**: Directly addresses concerns raised in SME interviews, particularly around {focus}",
			"**Key Benefits**:",
			*[f"- {flatten(benefit)}" for benefit in strategy.benefits],
			f"**Ideal For**: {flatten(', '.join(strategy.ideal_for))}",
			f"**Implementation Timeline**: {flatten(strategy.implementation_weeks)}",
			f"**Expert Rationale**: {flatten(strategy.expert_rationale)}",
		])
	out.extend([
		"",
		"## Implementation Roadmap",
		bundle.implementation_roadmap,
	])
	return "\n".join(out).strip()
