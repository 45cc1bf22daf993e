from __future__ import annotations
from typing import Dict, Optional, Tuple

from .catalogue import DOMAIN_TABLE
from .schemas import DEFAULT_DOMAIN, Complexity, Domain, DomainProfile

# Content-length bands used as a proxy for audience sophistication
INTERMEDIATE_MIN_CHARS = 2000
ADVANCED_MIN_CHARS = 5000

# Heuristic pseudo-scores: base plus an offset bounded by the keyword hits.
# Not calibrated probabilities.
CONFIDENCE_BASE = 85
CONFIDENCE_MAX_OFFSET = 9
SUITABILITY_BASE = 87
SUITABILITY_MAX_OFFSET = 7


def score_domains(text: str) -> Dict[Domain, int]:
	lowered = (text or "").lower()
	return {
		entry.domain: sum(1 for keyword in entry.keywords if keyword in lowered)
		for entry in DOMAIN_TABLE
	}


def pick_domain(scores: Dict[Domain, int]) -> Tuple[Domain, int]:
	best_domain = DEFAULT_DOMAIN
	best_score = 0
	# Strict comparison keeps the first declared domain on ties
	for entry in DOMAIN_TABLE:
		score = scores.get(entry.domain, 0)
		if score > best_score:
			best_domain, best_score = entry.domain, score
	return best_domain, best_score


def estimate_complexity(text: str) -> Complexity:
	length = len(text or "")
	if length > ADVANCED_MIN_CHARS:
		return Complexity.ADVANCED
	if length > INTERMEDIATE_MIN_CHARS:
		return Complexity.INTERMEDIATE
	return Complexity.BEGINNER


_AUDIENCE_WORDS = (
	(Complexity.BEGINNER, ("beginner", "novice", "entry", "new hire", "introductory")),
	(Complexity.ADVANCED, ("advanced", "expert", "senior", "specialist")),
	(Complexity.INTERMEDIATE, ("intermediate", "experienced", "mid-level")),
)


def complexity_for_audience(audience_level: Optional[str]) -> Optional[Complexity]:
	lowered = (audience_level or "").lower()
	if not lowered:
		return None
	for complexity, words in _AUDIENCE_WORDS:
		if any(word in lowered for word in words):
			return complexity
	return None


def classify_domain(text: str) -> DomainProfile:
	domain, hits = pick_domain(score_domains(text))
	return DomainProfile(
		primary_domain=domain,
		confidence=CONFIDENCE_BASE + min(CONFIDENCE_MAX_OFFSET, hits),
		complexity=estimate_complexity(text),
		suitability_score=SUITABILITY_BASE + min(SUITABILITY_MAX_OFFSET, hits),
		content_type=f"{domain.value} Training Material",
	)
