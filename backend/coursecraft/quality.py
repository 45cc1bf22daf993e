"""Heuristic quality scores and content gaps.

Stand-in for an external assessment: every axis is kept inside 60-90 so the
heuristic never reports more than a model-backed review could, and the same
text always yields the same scores and gaps.
"""
from __future__ import annotations
import re
from typing import List, Sequence, Tuple

from .schemas import Gap, QualityProfile, Severity

AXIS_MIN = 60
AXIS_MAX = 90

INTERACTIVE_CUES = ("exercise", "activity", "quiz", "scenario", "practice", "case study", "discussion", "simulation", "hands-on", "role play")
ASSESSMENT_CUES = ("quiz", "test", "assessment", "exam", "knowledge check", "evaluate", "evaluation", "rubric")
OBJECTIVE_CUES = ("objective", "learning goal", "learners will", "you will be able", "by the end of", "outcome")
EXAMPLE_CUES = ("example", "for instance", "e.g.", "such as", "case study", "illustrat")

_HEADING_RE = re.compile(r"^\s*(#{1,6}\s+\S|\d+(\.\d+)*[.)]?\s+[A-Z]|[A-Z][A-Z0-9 &/-]{3,}$)", re.MULTILINE)
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]")
_YEAR_RE = re.compile(r"\b(19\d{2}|20\d{2})\b")

# Gap catalogue in priority order within each severity
GAP_CATALOGUE: Tuple[Gap, ...] = (
	Gap(
		type="Interactive Elements Missing",
		severity=Severity.HIGH,
		impact="Reduced learner engagement",
		category="Engagement",
		description="Content lacks interactive elements for hands-on learning",
		recommendation="Add practical exercises and interactive examples",
	),
	Gap(
		type="Assessment Strategy Needed",
		severity=Severity.MEDIUM,
		impact="Cannot measure learning progress",
		category="Assessment",
		description="No assessment mechanisms to validate learning",
		recommendation="Implement progressive assessments and knowledge checks",
	),
	Gap(
		type="Learning Objectives Undefined",
		severity=Severity.MEDIUM,
		impact="Learners cannot tell what they are expected to achieve",
		category="Structure",
		description="No explicit learning objectives or expected outcomes are stated",
		recommendation="Write measurable objectives for each module before development",
	),
	Gap(
		type="Content Structure Unclear",
		severity=Severity.LOW,
		impact="Harder navigation and chunking into modules",
		category="Structure",
		description="Long content without headings or numbered sections",
		recommendation="Break the material into titled sections and short modules",
	),
	Gap(
		type="Practical Examples Limited",
		severity=Severity.LOW,
		impact="Weak transfer of concepts to real work",
		category="Application",
		description="Few worked examples or real-world illustrations",
		recommendation="Add domain scenarios and worked examples for key concepts",
	),
)

_SEVERITY_RANK = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


def _clamp(value: int) -> int:
	return max(AXIS_MIN, min(AXIS_MAX, value))


def count_cues(text: str, cues: Sequence[str]) -> int:
	lowered = (text or "").lower()
	return sum(1 for cue in cues if cue in lowered)


def has_headings(text: str) -> bool:
	return bool(_HEADING_RE.search(text or ""))


def average_sentence_words(text: str) -> float:
	sentences = [s for s in _SENTENCE_RE.findall(text or "") if s.strip()]
	if not sentences:
		return 0.0
	return sum(len(s.split()) for s in sentences) / len(sentences)


def clarity_score(text: str) -> int:
	avg = average_sentence_words(text)
	score = 82
	if avg > 30:
		score -= 10
	elif avg > 22:
		score -= 4
	elif 0 < avg <= 18:
		score += 4
	if has_headings(text):
		score += 2
	return _clamp(score)


def completeness_score(text: str) -> int:
	length = len(text or "")
	if length < 500:
		score = 62
	elif length < 2000:
		score = 70
	elif length < 5000:
		score = 75
	else:
		score = 80
	score += 2 * min(3, count_cues(text, OBJECTIVE_CUES) + count_cues(text, ASSESSMENT_CUES))
	return _clamp(score)


def engagement_score(text: str) -> int:
	return _clamp(70 + 3 * count_cues(text, INTERACTIVE_CUES))


def currency_score(text: str) -> int:
	years = [int(y) for y in _YEAR_RE.findall(text or "")]
	if not years:
		return 85
	latest = max(years)
	if latest >= 2020:
		return _clamp(88)
	if latest < 2010:
		return _clamp(72)
	return _clamp(80)


def score_quality(text: str) -> QualityProfile:
	return QualityProfile.from_axes(
		clarity=clarity_score(text),
		completeness=completeness_score(text),
		engagement=engagement_score(text),
		currency=currency_score(text),
	)


def detect_gaps(text: str, quality: QualityProfile) -> List[Gap]:
	triggered = {
		"Interactive Elements Missing": count_cues(text, INTERACTIVE_CUES) == 0 or quality.engagement < 75,
		"Assessment Strategy Needed": count_cues(text, ASSESSMENT_CUES) == 0,
		"Learning Objectives Undefined": count_cues(text, OBJECTIVE_CUES) == 0,
		"Content Structure Unclear": len(text or "") > 2000 and not has_headings(text),
		"Practical Examples Limited": count_cues(text, EXAMPLE_CUES) == 0,
	}
	gaps = [gap.model_copy() for gap in GAP_CATALOGUE if triggered[gap.type]]
	# sorted() is stable, so catalogue order holds inside a severity
	return sorted(gaps, key=lambda g: _SEVERITY_RANK[g.severity])


def assess_quality(text: str) -> Tuple[QualityProfile, List[Gap]]:
	quality = score_quality(text)
	return quality, detect_gaps(text, quality)
