"""Best-effort extraction of strategies from a narrative document.

Each rule below is a pure function over one text span so it can be tested on
its own. Nothing in this module raises on arbitrary input; a narrative with no
strategy markers still yields a one-strategy bundle.
"""
from __future__ import annotations
import random
import re
import zlib
from typing import List, Optional, Sequence, Tuple

from .narrative_writer import STRATEGY_MARKER
from .schemas import BundleSource, DomainProfile, Strategy, StrategyBundle

MAX_STRATEGIES = 6
MAX_BENEFITS = 4
DESCRIPTION_MIN_CHARS = 50
DESCRIPTION_MAX_CHARS = 300
RATIONALE_MAX_CHARS = 200
SUITABILITY_DEFAULT_RANGE = (90, 97)

DEFAULT_TIMELINE = "4-6 weeks"
DEFAULT_BENEFITS = ["Personalized Learning", "SME-Aligned Content", "Domain Expertise", "Improved Outcomes"]
DEFAULT_RATIONALE = "Expert strategy developed based on comprehensive analysis of content characteristics and SME priorities."
DEFAULT_SUMMARY = "Comprehensive personalized strategy analysis based on content domain, quality metrics, and SME priorities."
DEFAULT_ROADMAP = "Detailed implementation roadmap will be provided upon strategy selection."

_MARKER_RE = re.compile(rf"^[ \t]*(?:#{{1,6}}[ \t]*)?{STRATEGY_MARKER}", re.MULTILINE)
# Level-1/2 headings close a strategy span; level-3 headings may live inside one
_SECTION_END_RE = re.compile(r"^[ \t]*#{1,2}[ \t]+\S", re.MULTILINE)
_TITLE_PREFIX_RE = re.compile(r"^[\w ]{0,30}?strategy(?:\s*#?\d+)?\s*(?::|[-–](?=\s))\s*", re.IGNORECASE)
# Labelled "**X**: value" lines win over a bare keyword quoted in prose
_SUITABILITY_LABEL_RE = re.compile(
	r"^[ \t]*[-*_]*[ \t]*[\w ]{0,20}?suitability[*_]*[ \t]*:[*_ \t]*(\d{1,3}(?:\.\d+)?)\s*%",
	re.IGNORECASE | re.MULTILINE,
)
_RATIONALE_LABEL_RE = re.compile(
	r"^[ \t]*[-*_]*[ \t]*(?:expert[ \t]+)?rationale[*_]*[ \t]*:[*_ \t]*([^*#]+)",
	re.IGNORECASE | re.MULTILINE,
)
_SUITABILITY_RE = re.compile(r"suitability[^0-9\n]{0,30}?(\d{1,3}(?:\.\d+)?)\s*%", re.IGNORECASE)
_TIMELINE_LABEL_RE = re.compile(
	r"^[ \t]*[-*_]*[ \t]*(?:implementation[ \t]+)?timeline[*_]*[ \t]*:[*_ \t]*([^.\n]+)",
	re.IGNORECASE | re.MULTILINE,
)
_TIMELINE_RE = re.compile(r"timeline[*:\s]*([^.\n]+)", re.IGNORECASE)
_RATIONALE_RE = re.compile(r"rationale[*:\s]*([^*#]+)", re.IGNORECASE)
_BULLET_RE = re.compile(r"^(?:[-•*]|\d+[.)])\s+")


def find_spans(text: str) -> List[str]:
	text = text or ""
	starts = [m.start() for m in _MARKER_RE.finditer(text)]
	spans: List[str] = []
	for i, start in enumerate(starts):
		limit = starts[i + 1] if i + 1 < len(starts) else len(text)
		# Skip the marker line itself before looking for a closing heading
		line_end = text.find("\n", start)
		body_from = limit if line_end == -1 else min(line_end, limit)
		closing = _SECTION_END_RE.search(text, body_from, limit)
		end = closing.start() if closing else limit
		spans.append(text[start:end])
	return spans


def _clean_label(value: str) -> str:
	return value.strip().strip("*_").strip()


def extract_title(span: str, index: int) -> str:
	lines = span.splitlines()
	if not lines:
		return f"Strategy {index}"
	head = lines[0]
	rest = head.split(STRATEGY_MARKER, 1)[1] if STRATEGY_MARKER in head else head
	title = _clean_label(_TITLE_PREFIX_RE.sub("", _clean_label(rest)))
	if title:
		return title
	for line in lines[1:]:
		candidate = _clean_label(line.lstrip("#"))
		if candidate:
			return candidate
	return f"Strategy {index}"


def extract_description(span: str, title: str = "") -> str:
	for line in span.splitlines()[1:]:
		line = line.strip()
		if len(line) > DESCRIPTION_MIN_CHARS and not line.startswith("**") and not line.startswith("#"):
			if len(line) > DESCRIPTION_MAX_CHARS:
				return line[:DESCRIPTION_MAX_CHARS] + "..."
			return line
	suffix = f": {title}" if title else ""
	return f"Personalized strategy based on detailed content and SME analysis{suffix}."


def extract_suitability(span: str, rng: Optional[random.Random] = None) -> int:
	match = _SUITABILITY_LABEL_RE.search(span) or _SUITABILITY_RE.search(span)
	if match:
		return max(0, min(100, int(round(float(match.group(1))))))
	rng = rng or random.Random(zlib.crc32(span.encode("utf-8")))
	low, high = SUITABILITY_DEFAULT_RANGE
	return rng.randint(low, high)


def extract_timeline(span: str) -> str:
	for pattern in (_TIMELINE_LABEL_RE, _TIMELINE_RE):
		match = pattern.search(span)
		if match:
			value = _clean_label(match.group(1))
			if value:
				return value
	return DEFAULT_TIMELINE


def extract_benefits(span: str) -> List[str]:
	benefits: List[str] = []
	in_section = False
	for line in span.splitlines():
		line = line.strip()
		lowered = line.lower()
		if not in_section and ("benefit" in lowered or "advantage" in lowered):
			in_section = True
			continue
		if not in_section:
			continue
		if line.startswith("**") and benefits:
			break
		bullet = _BULLET_RE.match(line)
		if bullet and not line.startswith("**"):
			item = _clean_label(line[bullet.end():])
			if item:
				benefits.append(item)
			if len(benefits) >= MAX_BENEFITS:
				break
	return benefits or list(DEFAULT_BENEFITS)


def extract_rationale(span: str) -> str:
	match = _RATIONALE_LABEL_RE.search(span) or _RATIONALE_RE.search(span)
	if match:
		paragraph = re.split(r"\n\s*\n", match.group(1).strip(), maxsplit=1)[0]
		value = " ".join(paragraph.split())
		if value:
			if len(value) > RATIONALE_MAX_CHARS:
				return value[:RATIONALE_MAX_CHARS] + "..."
			return value
	return DEFAULT_RATIONALE


def extract_section(text: str, heading: str, default: str) -> str:
	pattern = re.compile(
		rf"^[ \t]*#{{1,3}}[ \t]*{re.escape(heading)}[^\n]*\n(.*?)(?=^[ \t]*#{{1,3}}[ \t]|\Z)",
		re.IGNORECASE | re.MULTILINE | re.DOTALL,
	)
	match = pattern.search(text or "")
	if match and match.group(1).strip():
		return match.group(1).strip()
	return default


def _dedupe(values: Sequence[str]) -> List[str]:
	# Suffixed copies must not collide with emitted values or with later originals
	reserved = set(values)
	emitted: set = set()
	unique: List[str] = []
	for value in values:
		candidate = value
		count = 1
		while candidate in emitted or (candidate != value and candidate in reserved):
			count += 1
			candidate = f"{value} ({count})"
		emitted.add(candidate)
		unique.append(candidate)
	return unique


def _ideal_for(profile: Optional[DomainProfile]) -> List[str]:
	return [profile.primary_domain.value] if profile else ["Professional Learners"]


def parse_strategy(span: str, index: int, profile: Optional[DomainProfile], rng: Optional[random.Random] = None) -> Strategy:
	title = extract_title(span, index)
	return Strategy(
		id=f"narrative_strategy_{index}",
		name=title,
		type="narrative_personalized",
		description=extract_description(span, title),
		implementation_weeks=extract_timeline(span),
		benefits=extract_benefits(span),
		ideal_for=_ideal_for(profile),
		expert_rationale=extract_rationale(span),
		suitability=extract_suitability(span, rng),
		personalization_flags={"personalized": True, "narrative_generated": True},
		full_content=span,
	)


def fallback_strategy(text: str, profile: Optional[DomainProfile]) -> Strategy:
	label = profile.primary_domain.value if profile else "Learning"
	return Strategy(
		id="narrative_comprehensive",
		name=f"Personalized {label} Strategy",
		type="narrative_comprehensive",
		description=text,
		implementation_weeks="5-7 weeks",
		benefits=["Fully Personalized", "SME-Integrated", "Domain-Specific", "Gap-Targeted"],
		ideal_for=_ideal_for(profile),
		expert_rationale="Custom strategy developed through analysis of specific content characteristics and organizational priorities.",
		suitability=94,
		personalization_flags={"personalized": True, "narrative_generated": True, "unstructured": True},
		full_content=text,
	)


def parse_strategies(
	text: str,
	profile: Optional[DomainProfile] = None,
	rng: Optional[random.Random] = None,
) -> Tuple[List[Strategy], bool]:
	strategies = [
		parse_strategy(span, index, profile, rng)
		for index, span in enumerate(find_spans(text)[:MAX_STRATEGIES], start=1)
	]
	if not strategies:
		return [fallback_strategy(text or "", profile)], False
	names = _dedupe([s.name for s in strategies])
	descriptions = _dedupe([s.description for s in strategies])
	for strategy, name, description in zip(strategies, names, descriptions):
		strategy.name = name
		strategy.description = description
	return strategies, True


def parse_narrative(
	text: str,
	profile: Optional[DomainProfile] = None,
	rng: Optional[random.Random] = None,
) -> StrategyBundle:
	text = text or ""
	strategies, structured = parse_strategies(text, profile, rng)
	return StrategyBundle(
		strategies=strategies,
		executive_summary=extract_section(text, "Executive Summary", DEFAULT_SUMMARY),
		implementation_roadmap=extract_section(text, "Implementation Roadmap", DEFAULT_ROADMAP),
		source=BundleSource.PARSED if structured else BundleSource.PARSED_FALLBACK,
		full_response=text,
	)
