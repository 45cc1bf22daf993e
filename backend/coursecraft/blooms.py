from __future__ import annotations
import re
from typing import Dict, List, Tuple

from .schemas import BloomLevelAnalysis, BloomsRecommendations, BloomsTaxonomy

LEVELS: Tuple[str, ...] = ("remember", "understand", "apply", "analyze", "evaluate", "create")

# Verbs detected in the content, per level
DETECTION_VERBS: Dict[str, Tuple[str, ...]] = {
	"remember": ("define", "list", "identify", "name", "recall", "recognize", "memorize", "state"),
	"understand": ("explain", "describe", "summarize", "interpret", "classify", "discuss", "paraphrase"),
	"apply": ("apply", "demonstrate", "implement", "execute", "operate", "solve", "perform", "use"),
	"analyze": ("analyze", "analyse", "examine", "compare", "contrast", "differentiate", "investigate", "distinguish"),
	"evaluate": ("evaluate", "assess", "critique", "judge", "justify", "recommend", "validate"),
	"create": ("design", "develop", "formulate", "construct", "generate", "create", "compose", "plan"),
}

# Verbs suggested for writing objectives at each level
SUGGESTED_VERBS: Dict[str, Tuple[str, ...]] = {
	"remember": ("identify", "list", "name", "define", "recall"),
	"understand": ("explain", "describe", "summarize", "interpret", "classify"),
	"apply": ("demonstrate", "execute", "implement", "operate", "use"),
	"analyze": ("examine", "compare", "contrast", "differentiate", "investigate"),
	"evaluate": ("assess", "critique", "judge", "recommend", "validate"),
	"create": ("design", "develop", "formulate", "construct", "generate"),
}

OBJECTIVE_TEMPLATES: Dict[str, str] = {
	"apply": "Learners will demonstrate the core procedures in simulated work situations (Apply)",
	"analyze": "Learners will analyze case studies to identify best practices (Analyze)",
	"evaluate": "Learners will evaluate different approaches and recommend solutions (Evaluate)",
	"create": "Learners will design an improved workflow using the course concepts (Create)",
	"understand": "Learners will explain the key concepts in their own words (Understand)",
	"remember": "Learners will recall the essential terminology (Remember)",
}

SUGGESTED_BALANCE = "30% Remember/Understand, 40% Apply, 20% Analyze, 10% Evaluate/Create"
OVERREPRESENTED_PERCENT = 40
MAX_EXAMPLES = 2
EXAMPLE_CHARS = 120

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n+")


def _verb_pattern(verbs: Tuple[str, ...]) -> re.Pattern:
	alternatives = "|".join(re.escape(v) for v in verbs)
	return re.compile(rf"\b(?:{alternatives})(?:s|es|d|ed|ing)?\b", re.IGNORECASE)


_PATTERNS = {level: _verb_pattern(verbs) for level, verbs in DETECTION_VERBS.items()}


def _examples(sentences: List[str], pattern: re.Pattern) -> List[str]:
	found: List[str] = []
	for sentence in sentences:
		if pattern.search(sentence):
			found.append(sentence[:EXAMPLE_CHARS])
			if len(found) >= MAX_EXAMPLES:
				break
	return found


def assess_blooms(text: str) -> BloomsTaxonomy:
	text = text or ""
	counts = {level: len(_PATTERNS[level].findall(text)) for level in LEVELS}
	total = sum(counts.values())
	sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]

	analysis: Dict[str, BloomLevelAnalysis] = {}
	for level in LEVELS:
		percentage = int(round(100 * counts[level] / total)) if total else 0
		analysis[level] = BloomLevelAnalysis(
			present=counts[level] > 0,
			percentage=min(100, percentage),
			examples=_examples(sentences, _PATTERNS[level]) if counts[level] else [],
			action_verbs=list(SUGGESTED_VERBS[level]),
		)

	missing = [level.capitalize() for level in LEVELS if not analysis[level].present]
	overrepresented = [
		level.capitalize() for level in LEVELS
		if analysis[level].percentage > OVERREPRESENTED_PERCENT
	]
	# Higher-order levels first: those are the ones worth writing objectives for
	priority = ("apply", "analyze", "evaluate", "create", "understand", "remember")
	suggestions = [OBJECTIVE_TEMPLATES[level] for level in priority if not analysis[level].present][:3]

	return BloomsTaxonomy(
		current_levels=[level.capitalize() for level in LEVELS if analysis[level].present],
		level_analysis=analysis,
		recommendations=BloomsRecommendations(
			missing_levels=missing,
			overrepresented_levels=overrepresented,
			suggested_balance=SUGGESTED_BALANCE,
			learning_objective_suggestions=suggestions,
		),
	)
