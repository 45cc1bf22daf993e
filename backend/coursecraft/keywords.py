from __future__ import annotations
from typing import List

STOP_WORDS = frozenset({
	"the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
	"is", "are", "was", "were", "be", "been", "have", "has", "had", "do", "does", "did",
	"will", "would", "could", "should", "may", "might", "can", "must", "shall",
	"a", "an", "this", "that", "these", "those", "from", "into", "than", "then",
	"they", "their", "them", "there", "what", "when", "which", "while",
})

_STRIP_CHARS = ".,;:!?\"'()[]{}<>*_`~“”‘’…"


def extract_keywords(text: str, limit: int = 5) -> List[str]:
	"""Return up to ``limit`` salient lowercase tokens in order of first occurrence."""
	keywords: List[str] = []
	for raw in (text or "").lower().split():
		word = raw.strip(_STRIP_CHARS)
		if len(word) <= 3 or word in STOP_WORDS or word in keywords:
			continue
		keywords.append(word)
		if len(keywords) >= limit:
			break
	return keywords
