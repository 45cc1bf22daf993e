from __future__ import annotations
from typing import Optional, Sequence

from .catalogue import DOMAIN_TABLE
from .keywords import extract_keywords
from .narrative_writer import STRATEGY_MARKER
from .schemas import ContentAnalysis, PreSMEContext, SMEResponse


FRAMEWORK_INSTRUCTIONS = {
	"blooms": (
		"FOCUS ON BLOOM'S TAXONOMY ANALYSIS:\n"
		"- Map content to all 6 cognitive levels (Remember, Understand, Apply, Analyze, Evaluate, Create)\n"
		"- Identify specific examples and percentages for each level\n"
		"- Suggest action verbs for learning objectives at each level\n"
		"- Recommend optimal distribution across taxonomy levels"
	),
	"smart": (
		"FOCUS ON SMART GOALS FRAMEWORK:\n"
		"- Analyze how content supports Specific, Measurable, Achievable, Relevant, Time-bound objectives\n"
		"- Suggest SMART learning objectives for each content section\n"
		"- Recommend assessment methods that align with SMART criteria\n"
		"- Provide measurable outcome indicators"
	),
	"merrills": (
		"FOCUS ON MERRILL'S FIRST PRINCIPLES:\n"
		"- Evaluate Problem-centered approach potential\n"
		"- Assess Activation of prior knowledge opportunities\n"
		"- Analyze Demonstration and Application possibilities\n"
		"- Recommend Integration strategies for real-world transfer"
	),
	"kirkpatrick": (
		"FOCUS ON KIRKPATRICK'S FOUR LEVELS:\n"
		"- Reaction: How to measure learner satisfaction\n"
		"- Learning: Knowledge and skill acquisition assessment\n"
		"- Behavior: On-the-job application opportunities\n"
		"- Results: Business impact and ROI measurement strategies"
	),
	"addie": (
		"FOCUS ON ADDIE MODEL APPLICATION:\n"
		"- Analysis: Learning needs and audience assessment\n"
		"- Design: Learning objectives and strategy recommendations\n"
		"- Development: Content creation and resource suggestions\n"
		"- Implementation: Delivery method recommendations\n"
		"- Evaluation: Assessment and improvement strategies"
	),
	"recommend": (
		"PROVIDE FRAMEWORK RECOMMENDATIONS:\n"
		"- Analyze content to determine most suitable instructional framework\n"
		"- Compare Bloom's Taxonomy vs SMART vs Merrill's Principles applicability\n"
		"- Recommend specific framework based on content type, complexity, and domain\n"
		"- Justify framework selection with specific reasoning"
	),
}


def build_system_prompt() -> str:
	expertise = "\n".join(f"- **{entry.domain.value}**: {entry.expertise}" for entry in DOMAIN_TABLE)
	focus = "\n".join(f"- **{entry.domain.value}**: {entry.analysis_focus}" for entry in DOMAIN_TABLE)
	return (
		"You are a Senior Instructional Designer with 20+ years of experience in e-learning development, "
		"learning sciences, and educational technology.\n\n"
		"## Critical Requirements\n"
		"Every strategy recommendation MUST be specifically tailored to the exact combination of:\n"
		"1. Content domain and type\n"
		"2. Content quality scores and gaps\n"
		"3. Each individual SME response\n"
		"4. Complexity level and audience needs\n\n"
		"## Domain Expertise Areas\n"
		f"{expertise}\n\n"
		"## Domain Analysis Focus\n"
		f"{focus}\n\n"
		"## Response Format Requirements\n"
		"Always structure your response as:\n\n"
		"# Personalized Strategy Analysis\n\n"
		"## Executive Summary\n"
		"[2-3 sentences summarizing what drove your recommendations]\n\n"
		"## Personalized Strategy Recommendations\n\n"
		f"### {STRATEGY_MARKER} Primary Strategy: [Highly Specific Domain Strategy Name]\n"
		"[One paragraph description specific to the domain and SME priorities]\n"
		"**Suitability**: [number]%\n"
		"**Key Benefits**:\n"
		"- [benefit]\n"
		"- [benefit]\n"
		"**SME Alignment**: [How this addresses specific SME concerns]\n"
		"**Success Metrics**: [Measurable outcomes]\n"
		"**Implementation Timeline**: [e.g. 4-6 weeks]\n"
		"**Expert Rationale**: [Professional reasoning for this recommendation]\n\n"
		f"[Repeat the {STRATEGY_MARKER} section for 3-5 additional strategies, each titled "
		f"'### {STRATEGY_MARKER} Supporting Strategy: <name>']\n\n"
		"## Implementation Roadmap\n"
		"[Timeline and milestones based on complexity, domain requirements, and SME priorities]\n"
	)


def _gap_block(analysis: ContentAnalysis) -> str:
	if not analysis.identified_gaps:
		return "No critical gaps identified"
	blocks = []
	for number, gap in enumerate(analysis.identified_gaps, start=1):
		blocks.append(
			f"**Gap {number}**: {gap.type}\n"
			f"- Severity: {gap.severity.value}\n"
			f"- Impact: {gap.impact}\n"
			f"- Category: {gap.category}\n"
			f"- Description: {gap.description}\n"
			f"- Recommendation: {gap.recommendation}"
		)
	return "\n\n".join(blocks)


def _sme_block(sme_responses: Sequence[SMEResponse]) -> str:
	if not sme_responses:
		return "No SME responses provided"
	blocks = []
	for number, response in enumerate(sme_responses, start=1):
		blocks.append(
			f"**SME Response {number}**:\n"
			f'- Question: "{response.question}"\n'
			f'- Answer: "{response.answer}"\n'
			f"- Category: {response.category or 'General'}\n"
			f"- Word Count: {len(response.answer.split())} words\n"
			f"- Key Themes: {', '.join(extract_keywords(response.answer))}"
		)
	return "\n\n".join(blocks)


def build_user_prompt(analysis: ContentAnalysis, sme_responses: Sequence[SMEResponse], session_id: Optional[str] = None) -> str:
	profile = analysis.domain_classification
	quality = analysis.quality_assessment
	suitability = analysis.suitability_assessment
	domain = profile.primary_domain.value
	complexity = profile.complexity.value
	return (
		f"## PERSONALIZED STRATEGY ANALYSIS REQUEST - SESSION: {session_id or 'n/a'}\n\n"
		"### Content Domain Analysis:\n"
		f"**Primary Domain**: {domain}\n"
		f"**Content Type**: {profile.content_type}\n"
		f"**Complexity Level**: {complexity}\n"
		f"**Domain Confidence**: {profile.confidence}%\n"
		f"**Domain Suitability**: {profile.suitability_score}%\n\n"
		"### Content Quality Metrics:\n"
		f"**Overall Quality Score**: {quality.overall}%\n"
		f"**Clarity Score**: {quality.clarity}%\n"
		f"**Completeness Score**: {quality.completeness}%\n"
		f"**Engagement Score**: {quality.engagement}%\n"
		f"**Currency Score**: {quality.currency}%\n\n"
		"### Suitability Assessment:\n"
		f"**Suitability Score**: {suitability.score}%\n"
		f"**Suitability Level**: {suitability.level}\n"
		f"**Recommendation**: {suitability.recommendation or 'Requires assessment'}\n\n"
		"### Critical Content Gaps Identified:\n"
		f"{_gap_block(analysis)}\n\n"
		f"### SME Interview Responses ({len(sme_responses)} responses analyzed):\n"
		f"{_sme_block(sme_responses)}\n\n"
		"### Analysis Task:\n"
		f"Create a personalized strategy analysis for this **{domain}** content with **{complexity}** complexity. "
		"It must be unique to the combination of:\n"
		f"1. **Domain Requirements**: Apply deep {domain} expertise\n"
		"2. **Quality Scores**: Address the specific quality metrics provided\n"
		f"3. **Content Gaps**: Resolve the {len(analysis.identified_gaps)} identified gaps\n"
		f"4. **SME Priorities**: Integrate all {len(sme_responses)} SME responses individually\n"
		f"5. **Complexity Level**: Match the {complexity} sophistication level\n\n"
		"Generate 4-6 unique strategies following the structured format."
	)


def build_analysis_prompt(text: str, file_names: Sequence[str], pre_sme_context: Optional[PreSMEContext] = None, *, max_chars: int = 4000) -> str:
	framework = (pre_sme_context.instructional_framework if pre_sme_context else None) or "recommend"
	instructions = FRAMEWORK_INSTRUCTIONS.get(framework, FRAMEWORK_INSTRUCTIONS["recommend"])
	context = ""
	if pre_sme_context:
		context = (
			"USER COURSE PLANNING CONTEXT:\n"
			f"- Learning Objective: {pre_sme_context.learning_objective}\n"
			f"- Target Audience: {pre_sme_context.audience_level}\n"
			f"- Course Type: {pre_sme_context.course_type}\n"
			f"- Duration: {pre_sme_context.course_duration}\n"
			f"- Prerequisites: {pre_sme_context.prerequisites}\n"
			f"- Selected Framework: {framework}\n\n"
		)
	domains = ", ".join(f'"{entry.domain.value}"' for entry in DOMAIN_TABLE)
	return (
		"You are a Senior Instructional Designer analyzing content for e-learning conversion.\n\n"
		f"{instructions}\n\n"
		f"{context}"
		f"FILES: {', '.join(file_names) or 'n/a'}\n"
		f"CONTENT: {(text or '')[:max_chars]}\n\n"
		"Return ONLY a JSON object with keys:\n"
		f"domain_classification {{primary_domain (one of {domains}), content_type, confidence (0-100), "
		"complexity (Beginner|Intermediate|Advanced), suitability_score (0-100)}},\n"
		"suitability_assessment {score, level (Good|Very Good|Excellent), recommendation},\n"
		"quality_assessment {clarity, completeness, engagement, currency} (each 60-100),\n"
		"identified_gaps [{type, severity (High|Medium|Low), impact, category, description, recommendation}],\n"
		"blooms_taxonomy {current_levels, level_analysis {remember|understand|apply|analyze|evaluate|create: "
		"{present, percentage, examples, action_verbs}}, recommendations {missing_levels, overrepresented_levels, "
		"suggested_balance, learning_objective_suggestions}},\n"
		"justification {line1, line2},\n"
		"expert_suggestions {interactive_suggestions (3 items), key_recommendation},\n"
		"sme_questions (5-7 questions specific to this content).\n"
		"Base the analysis on the ACTUAL CONTENT. No markdown, no commentary."
	)
